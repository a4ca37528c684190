"""User ORM model. Table app_user (user is reserved in PostgreSQL)."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from agora.infrastructure.persistence.database import Base
from agora.infrastructure.persistence.models.mixins import TimestampMixin


class AppUser(TimestampMixin, Base):
    """User with both identities. Unique user_id, profile_id and username."""

    __tablename__ = "app_user"

    user_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    profile_id: Mapped[str] = mapped_column(String(36), nullable=False, unique=True)
    username: Mapped[str] = mapped_column(String(30), nullable=False, unique=True)
    profile_picture_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    banner_url: Mapped[str | None] = mapped_column(Text, nullable=True)

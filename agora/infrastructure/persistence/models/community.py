"""Community ORM model."""

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from agora.infrastructure.persistence.database import Base
from agora.infrastructure.persistence.models.mixins import TimestampMixin, UuidIdMixin


class Community(UuidIdMixin, TimestampMixin, Base):
    """Community. Table: community. owner_id holds either identity of the owner (no FK)."""

    __tablename__ = "community"

    owner_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    is_private: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    icon_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    banner_url: Mapped[str | None] = mapped_column(Text, nullable=True)

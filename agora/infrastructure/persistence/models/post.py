"""Post ORM model."""

from sqlalchemy import JSON, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from agora.infrastructure.persistence.database import Base
from agora.infrastructure.persistence.models.mixins import DocumentIdMixin, TimestampMixin


class Post(DocumentIdMixin, TimestampMixin, Base):
    """Post. Table: post. images is a JSON list of URLs."""

    __tablename__ = "post"

    community_id: Mapped[str] = mapped_column(String(36), nullable=False)
    author_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    kind: Mapped[str] = mapped_column(String(16), nullable=False)
    images: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        Index("ix_post_community_created", "community_id", "created_at"),
    )

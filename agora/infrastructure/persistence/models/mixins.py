"""Primary key and timestamp columns shared by the ORM models."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from agora.shared.utils.generators import generate_document_id, generate_uuid


class DocumentIdMixin:
    """Primary key as 24-hex document id (posts, subscriptions, reactions)."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String(24), primary_key=True, default=generate_document_id)


class UuidIdMixin:
    """Primary key as canonical UUID string (communities)."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String(36), primary_key=True, default=generate_uuid)


class TimestampMixin:
    """created_at and updated_at, both set by the database (timestamptz)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return _timestamp_column()

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return _timestamp_column(onupdate=func.now())


def _timestamp_column(**kwargs) -> Mapped[datetime]:
    return mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, **kwargs
    )

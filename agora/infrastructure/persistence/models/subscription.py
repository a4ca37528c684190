"""Subscription ORM model."""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from agora.infrastructure.persistence.database import Base
from agora.infrastructure.persistence.models.mixins import DocumentIdMixin, TimestampMixin


UQ_SUBSCRIPTION_USER_COMMUNITY = "uq_subscription_user_community"


class Subscription(DocumentIdMixin, TimestampMixin, Base):
    """Subscription. Table: subscription. Unique (user_id, community_id)."""

    __tablename__ = "subscription"

    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    community_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "community_id", name=UQ_SUBSCRIPTION_USER_COMMUNITY),
    )

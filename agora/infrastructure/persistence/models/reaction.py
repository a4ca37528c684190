"""Reaction ORM model."""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from agora.infrastructure.persistence.database import Base
from agora.infrastructure.persistence.models.mixins import DocumentIdMixin, TimestampMixin


class Reaction(DocumentIdMixin, TimestampMixin, Base):
    """Reaction. Table: reaction. Unique (post_id, user_id).

    No FK to post: modules own their tables, cleanup goes through IReactionsCleanup.
    """

    __tablename__ = "reaction"

    post_id: Mapped[str] = mapped_column(String(24), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False)

    __table_args__ = (
        UniqueConstraint("post_id", "user_id", name="uq_reaction_post_user"),
    )

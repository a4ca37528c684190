"""Subscription repository (SQLAlchemy). Returns domain entities."""

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.entities import SubscriptionEntity
from agora.domain.enums import CommunityRole
from agora.domain.exceptions import SubscriptionConflictException
from agora.infrastructure.persistence.models.subscription import (
    UQ_SUBSCRIPTION_USER_COMMUNITY,
    Subscription,
)
from agora.infrastructure.persistence.repositories.base import BaseRepository
from agora.shared.utils.datetime import ensure_utc


def _subscription_to_entity(s: Subscription) -> SubscriptionEntity:
    """Map ORM Subscription to SubscriptionEntity."""
    return SubscriptionEntity(
        id=s.id,
        user_id=s.user_id,
        community_id=s.community_id,
        role=CommunityRole(s.role),
        created_at=ensure_utc(s.created_at),
        updated_at=ensure_utc(s.updated_at),
    )


class SubscriptionRepository(BaseRepository[Subscription]):
    """ISubscriptionRepository. Uniqueness is enforced by uq_subscription_user_community."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Subscription)

    async def get(self, user_id: str, community_id: str) -> SubscriptionEntity | None:
        result = await self.db.execute(
            select(Subscription).where(
                Subscription.user_id == user_id,
                Subscription.community_id == community_id,
            )
        )
        row = result.scalar_one_or_none()
        return _subscription_to_entity(row) if row else None

    async def add(self, subscription: SubscriptionEntity) -> SubscriptionEntity:
        """Insert subscription.

        Raises SubscriptionConflictException when the (user_id, community_id)
        unique constraint rejects the row (concurrent subscribe of the same
        pair). Any other integrity error propagates. The insert runs in a
        savepoint so the surrounding transaction stays usable.
        """
        row = Subscription(
            id=subscription.id,
            user_id=subscription.user_id,
            community_id=subscription.community_id,
            role=subscription.role.value,
            created_at=subscription.created_at,
            updated_at=subscription.updated_at,
        )
        try:
            async with self.db.begin_nested():
                created = await self._create_row(row)
        except IntegrityError as e:
            if UQ_SUBSCRIPTION_USER_COMMUNITY not in str(e.orig):
                raise
            raise SubscriptionConflictException(
                subscription.user_id, subscription.community_id
            ) from None
        return _subscription_to_entity(created)

    async def delete(self, user_id: str, community_id: str) -> bool:
        deleted = await self._delete_where(
            Subscription.user_id == user_id,
            Subscription.community_id == community_id,
        )
        return deleted > 0

    async def list_by_community(
        self, community_id: str, skip: int = 0, limit: int = 100
    ) -> list[SubscriptionEntity]:
        result = await self.db.execute(
            select(Subscription)
            .where(Subscription.community_id == community_id)
            .order_by(Subscription.created_at, Subscription.id)
            .offset(skip)
            .limit(limit)
        )
        return [_subscription_to_entity(s) for s in result.scalars().all()]

    async def count_by_community(self, community_id: str) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(Subscription)
            .where(Subscription.community_id == community_id)
        )
        return result.scalar_one()

    async def list_by_user(self, user_id: str) -> list[SubscriptionEntity]:
        result = await self.db.execute(
            select(Subscription)
            .where(Subscription.user_id == user_id)
            .order_by(Subscription.created_at)
        )
        return [_subscription_to_entity(s) for s in result.scalars().all()]

    async def delete_by_community(self, community_id: str) -> int:
        return await self._delete_where(Subscription.community_id == community_id)

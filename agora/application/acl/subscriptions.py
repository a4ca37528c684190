"""Subscriptions facade over the subscriptions repository."""

from __future__ import annotations

from typing import TYPE_CHECKING

from agora.application.dtos.common import parse_value
from agora.domain.value_objects import CommunityId, UserId

if TYPE_CHECKING:
    from agora.application.interfaces.repositories import ISubscriptionRepository
    from agora.domain.enums import CommunityRole


class SubscriptionsFacade:
    """ISubscriptionsFacade backed by the module's own repository."""

    def __init__(self, subscription_repo: ISubscriptionRepository) -> None:
        self._repo = subscription_repo

    async def role_of(self, user_id: str, community_id: str) -> CommunityRole | None:
        uid = str(parse_value(UserId, user_id, "user_id"))
        cid = str(parse_value(CommunityId, community_id, "community_id"))
        subscription = await self._repo.get(uid, cid)
        return subscription.role if subscription else None

    async def is_subscribed(self, user_id: str, community_id: str) -> bool:
        return await self.role_of(user_id, community_id) is not None

    async def community_ids_of(self, user_id: str) -> list[str]:
        uid = str(parse_value(UserId, user_id, "user_id"))
        return [s.community_id for s in await self._repo.list_by_user(uid)]

"""Communities facade over the communities repository."""

from __future__ import annotations

from typing import TYPE_CHECKING

from agora.application.dtos.common import parse_value
from agora.domain.exceptions import ResourceNotFoundException
from agora.domain.value_objects import CommunityId

if TYPE_CHECKING:
    from agora.application.interfaces.repositories import ICommunityRepository
    from agora.domain.entities import CommunityEntity


class CommunitiesFacade:
    """ICommunitiesFacade backed by the module's own repository."""

    def __init__(self, community_repo: ICommunityRepository) -> None:
        self._repo = community_repo

    async def _get(self, community_id: str) -> CommunityEntity:
        cid = str(parse_value(CommunityId, community_id, "community_id"))
        community = await self._repo.get_by_id(cid)
        if community is None:
            raise ResourceNotFoundException("community", cid)
        return community

    async def exists(self, community_id: str) -> bool:
        cid = str(parse_value(CommunityId, community_id, "community_id"))
        return await self._repo.get_by_id(cid) is not None

    async def is_private(self, community_id: str) -> bool:
        return (await self._get(community_id)).is_private

    async def owner_id(self, community_id: str) -> str:
        return (await self._get(community_id)).owner_id

    async def is_owner(self, community_id: str, candidate_id: str) -> bool:
        return (await self._get(community_id)).is_owner(candidate_id)

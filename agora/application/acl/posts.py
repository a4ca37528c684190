"""Posts facade and post cleanup adapter over the posts repository."""

from __future__ import annotations

from typing import TYPE_CHECKING

from agora.application.dtos.common import parse_value
from agora.application.dtos.post import PostResult
from agora.domain.value_objects import PostId

if TYPE_CHECKING:
    from agora.application.interfaces.repositories import IPostRepository
    from agora.domain.enums import PostKind


class PostsFacade:
    """IPostsFacade backed by the module's own repository."""

    def __init__(self, post_repo: IPostRepository) -> None:
        self._repo = post_repo

    async def exists(self, post_id: str) -> bool:
        pid = str(parse_value(PostId, post_id, "post_id"))
        return await self._repo.get_by_id(pid) is not None

    async def posts_by_communities(
        self,
        community_ids: list[str],
        kind: PostKind | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[PostResult]:
        if not community_ids:
            return []
        posts = await self._repo.list_by_communities(
            community_ids, kind=kind, skip=offset, limit=limit
        )
        return [PostResult.from_entity(p) for p in posts]


class PostsCleanupAdapter:
    """IPostsCleanup used by community deletion."""

    def __init__(self, post_repo: IPostRepository) -> None:
        self._repo = post_repo

    async def post_ids_of_community(self, community_id: str) -> list[str]:
        return await self._repo.ids_by_community(community_id)

    async def delete_all_for_community(self, community_id: str) -> int:
        return await self._repo.delete_by_community(community_id)

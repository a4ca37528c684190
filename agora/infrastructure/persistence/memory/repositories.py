"""In-memory repositories (database_backend="memory").

Dict-backed implementations of the repository ports. Uniqueness rules match
the SQL schema and are checked at the write itself. Stored and returned
entities are copies, so callers never mutate the store by accident.
"""

from dataclasses import replace
from typing import Any, TypeVar

from agora.domain.entities import (
    CommunityEntity,
    PostEntity,
    ReactionEntity,
    SubscriptionEntity,
    UserEntity,
)
from agora.domain.enums import PostKind
from agora.domain.exceptions import (
    ResourceNotFoundException,
    SubscriptionConflictException,
    ValidationException,
)
from agora.shared.utils.datetime import utc_now


E = TypeVar("E")


def _copy(entity: E) -> E:
    return replace(entity)


def _page(items: list[Any], skip: int, limit: int) -> list[Any]:
    return items[skip : skip + limit]


class InMemoryCommunityRepository:
    def __init__(self) -> None:
        self.rows: dict[str, CommunityEntity] = {}

    async def get_by_id(self, community_id: str) -> CommunityEntity | None:
        row = self.rows.get(community_id)
        return _copy(row) if row else None

    async def list_all(self, skip: int = 0, limit: int = 100) -> list[CommunityEntity]:
        ordered = sorted(self.rows.values(), key=lambda c: c.created_at, reverse=True)
        return [_copy(c) for c in _page(ordered, skip, limit)]

    async def list_by_owner(self, owner_id: str) -> list[CommunityEntity]:
        owned = [c for c in self.rows.values() if c.owner_id == owner_id]
        owned.sort(key=lambda c: c.created_at, reverse=True)
        return [_copy(c) for c in owned]

    async def add(self, community: CommunityEntity) -> CommunityEntity:
        if community.id in self.rows:
            raise ValidationException("Community already exists", field="id")
        self.rows[community.id] = _copy(community)
        return _copy(community)

    async def update(self, community: CommunityEntity) -> CommunityEntity:
        if community.id not in self.rows:
            raise ResourceNotFoundException("community", community.id)
        self.rows[community.id] = _copy(community)
        return _copy(community)

    async def delete(self, community_id: str) -> bool:
        return self.rows.pop(community_id, None) is not None


class InMemoryUserRepository:
    def __init__(self) -> None:
        self.rows: dict[str, UserEntity] = {}

    async def get_by_user_id(self, user_id: str) -> UserEntity | None:
        row = self.rows.get(user_id)
        return _copy(row) if row else None

    async def get_by_username(self, username: str) -> UserEntity | None:
        for user in self.rows.values():
            if user.username.value == username:
                return _copy(user)
        return None

    async def add(self, user: UserEntity) -> UserEntity:
        for existing in self.rows.values():
            if (
                existing.user_id == user.user_id
                or existing.profile_id == user.profile_id
                or existing.username == user.username
            ):
                raise ValidationException(
                    "User identity or username already registered", field="username"
                )
        self.rows[user.user_id] = _copy(user)
        return _copy(user)

    async def update(self, user: UserEntity) -> UserEntity:
        if user.user_id not in self.rows:
            raise ResourceNotFoundException("user", user.user_id)
        for existing in self.rows.values():
            if existing.user_id != user.user_id and existing.username == user.username:
                raise ValidationException("Username is already taken", field="username")
        self.rows[user.user_id] = _copy(user)
        return _copy(user)


class InMemorySubscriptionRepository:
    """One subscription per (user_id, community_id); add() raises on duplicates."""

    def __init__(self) -> None:
        self.rows: dict[tuple[str, str], SubscriptionEntity] = {}

    async def get(self, user_id: str, community_id: str) -> SubscriptionEntity | None:
        row = self.rows.get((user_id, community_id))
        return _copy(row) if row else None

    async def add(self, subscription: SubscriptionEntity) -> SubscriptionEntity:
        key = (subscription.user_id, subscription.community_id)
        if key in self.rows:
            raise SubscriptionConflictException(*key)
        self.rows[key] = _copy(subscription)
        return _copy(subscription)

    async def delete(self, user_id: str, community_id: str) -> bool:
        return self.rows.pop((user_id, community_id), None) is not None

    async def list_by_community(
        self, community_id: str, skip: int = 0, limit: int = 100
    ) -> list[SubscriptionEntity]:
        members = [s for s in self.rows.values() if s.community_id == community_id]
        members.sort(key=lambda s: s.created_at)
        return [_copy(s) for s in _page(members, skip, limit)]

    async def count_by_community(self, community_id: str) -> int:
        return sum(1 for s in self.rows.values() if s.community_id == community_id)

    async def list_by_user(self, user_id: str) -> list[SubscriptionEntity]:
        mine = [s for s in self.rows.values() if s.user_id == user_id]
        mine.sort(key=lambda s: s.created_at)
        return [_copy(s) for s in mine]

    async def delete_by_community(self, community_id: str) -> int:
        keys = [k for k, s in self.rows.items() if s.community_id == community_id]
        for key in keys:
            del self.rows[key]
        return len(keys)


class InMemoryPostRepository:
    def __init__(self) -> None:
        self.rows: dict[str, PostEntity] = {}

    async def get_by_id(self, post_id: str) -> PostEntity | None:
        row = self.rows.get(post_id)
        return _copy(row) if row else None

    async def add(self, post: PostEntity) -> PostEntity:
        if post.id in self.rows:
            raise ValidationException("Post already exists", field="id")
        self.rows[post.id] = _copy(post)
        return _copy(post)

    async def delete(self, post_id: str) -> bool:
        return self.rows.pop(post_id, None) is not None

    async def list_by_community(
        self, community_id: str, skip: int = 0, limit: int = 100
    ) -> list[PostEntity]:
        return await self.list_by_communities([community_id], skip=skip, limit=limit)

    async def list_by_communities(
        self,
        community_ids: list[str],
        kind: PostKind | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[PostEntity]:
        wanted = set(community_ids)
        posts = [
            p
            for p in self.rows.values()
            if p.community_id in wanted and (kind is None or p.kind is kind)
        ]
        posts.sort(key=lambda p: (p.created_at, p.id), reverse=True)
        return [_copy(p) for p in _page(posts, skip, limit)]

    async def ids_by_community(self, community_id: str) -> list[str]:
        return [p.id for p in self.rows.values() if p.community_id == community_id]

    async def delete_by_community(self, community_id: str) -> int:
        ids = await self.ids_by_community(community_id)
        for post_id in ids:
            del self.rows[post_id]
        return len(ids)


class InMemoryReactionRepository:
    """One reaction per (post_id, user_id)."""

    def __init__(self) -> None:
        self.rows: dict[str, ReactionEntity] = {}

    async def get_by_post_and_user(
        self, post_id: str, user_id: str
    ) -> ReactionEntity | None:
        for reaction in self.rows.values():
            if reaction.post_id == post_id and reaction.user_id == user_id:
                return _copy(reaction)
        return None

    async def add(self, reaction: ReactionEntity) -> ReactionEntity:
        if await self.get_by_post_and_user(reaction.post_id, reaction.user_id):
            raise ValidationException("User already reacted to this post", field="post_id")
        self.rows[reaction.id] = _copy(reaction)
        return _copy(reaction)

    async def update(self, reaction: ReactionEntity) -> ReactionEntity:
        if reaction.id not in self.rows:
            raise ResourceNotFoundException("reaction", reaction.id)
        reaction.updated_at = utc_now()
        self.rows[reaction.id] = _copy(reaction)
        return _copy(reaction)

    async def delete(self, reaction_id: str) -> bool:
        return self.rows.pop(reaction_id, None) is not None

    async def list_by_post(self, post_id: str) -> list[ReactionEntity]:
        reactions = [r for r in self.rows.values() if r.post_id == post_id]
        reactions.sort(key=lambda r: r.created_at)
        return [_copy(r) for r in reactions]

    async def delete_by_posts(self, post_ids: list[str]) -> int:
        wanted = set(post_ids)
        ids = [rid for rid, r in self.rows.items() if r.post_id in wanted]
        for reaction_id in ids:
            del self.rows[reaction_id]
        return len(ids)

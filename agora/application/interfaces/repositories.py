"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
Repositories persist and return domain entities; no infrastructure imports.
Each module's repository is owned by that module only; other modules go
through its facade.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from agora.domain.entities import (
        CommunityEntity,
        PostEntity,
        ReactionEntity,
        SubscriptionEntity,
        UserEntity,
    )
    from agora.domain.enums import PostKind


class ICommunityRepository(Protocol):
    """Protocol for community repository (DIP)."""

    async def get_by_id(self, community_id: str) -> CommunityEntity | None:
        """Return community by id, or None."""

    async def list_all(self, skip: int = 0, limit: int = 100) -> list[CommunityEntity]:
        """Return communities, newest first."""

    async def list_by_owner(self, owner_id: str) -> list[CommunityEntity]:
        """Return communities whose recorded owner_id equals owner_id."""

    async def add(self, community: CommunityEntity) -> CommunityEntity:
        """Persist a new community."""

    async def update(self, community: CommunityEntity) -> CommunityEntity:
        """Persist changes to an existing community."""

    async def delete(self, community_id: str) -> bool:
        """Delete community; return False when it did not exist."""


class IUserRepository(Protocol):
    """Protocol for user repository (DIP)."""

    async def get_by_user_id(self, user_id: str) -> UserEntity | None:
        """Return user by primary identity, or None."""

    async def get_by_username(self, username: str) -> UserEntity | None:
        """Return user by unique username, or None."""

    async def add(self, user: UserEntity) -> UserEntity:
        """Persist a new user. Raises ValidationException on duplicate username."""

    async def update(self, user: UserEntity) -> UserEntity:
        """Persist profile changes."""


class ISubscriptionRepository(Protocol):
    """Protocol for subscription repository (DIP).

    add() enforces one subscription per (user_id, community_id) and raises
    SubscriptionConflictException when the store rejects a duplicate.
    """

    async def get(self, user_id: str, community_id: str) -> SubscriptionEntity | None:
        """Return the subscription for (user, community), or None."""

    async def add(self, subscription: SubscriptionEntity) -> SubscriptionEntity:
        """Persist a new subscription."""

    async def delete(self, user_id: str, community_id: str) -> bool:
        """Delete the (user, community) subscription; False when absent."""

    async def list_by_community(
        self, community_id: str, skip: int = 0, limit: int = 100
    ) -> list[SubscriptionEntity]:
        """Return subscriptions of a community, oldest first."""

    async def count_by_community(self, community_id: str) -> int:
        """Return number of subscriptions in a community."""

    async def list_by_user(self, user_id: str) -> list[SubscriptionEntity]:
        """Return all subscriptions of a user."""

    async def delete_by_community(self, community_id: str) -> int:
        """Delete all subscriptions of a community; return count deleted."""


class IPostRepository(Protocol):
    """Protocol for post repository (DIP)."""

    async def get_by_id(self, post_id: str) -> PostEntity | None:
        """Return post by id, or None."""

    async def add(self, post: PostEntity) -> PostEntity:
        """Persist a new post."""

    async def delete(self, post_id: str) -> bool:
        """Delete post; False when absent."""

    async def list_by_community(
        self, community_id: str, skip: int = 0, limit: int = 100
    ) -> list[PostEntity]:
        """Return posts of a community, newest first."""

    async def list_by_communities(
        self,
        community_ids: list[str],
        kind: PostKind | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[PostEntity]:
        """Return posts of any of the communities (optionally one kind), newest first."""

    async def ids_by_community(self, community_id: str) -> list[str]:
        """Return ids of all posts in a community."""

    async def delete_by_community(self, community_id: str) -> int:
        """Delete all posts of a community; return count deleted."""


class IReactionRepository(Protocol):
    """Protocol for reaction repository (DIP)."""

    async def get_by_post_and_user(
        self, post_id: str, user_id: str
    ) -> ReactionEntity | None:
        """Return the user's reaction on the post, or None."""

    async def add(self, reaction: ReactionEntity) -> ReactionEntity:
        """Persist a new reaction."""

    async def update(self, reaction: ReactionEntity) -> ReactionEntity:
        """Persist a reaction type change."""

    async def delete(self, reaction_id: str) -> bool:
        """Delete reaction; False when absent."""

    async def list_by_post(self, post_id: str) -> list[ReactionEntity]:
        """Return reactions of a post, oldest first."""

    async def delete_by_posts(self, post_ids: list[str]) -> int:
        """Delete reactions of the given posts; return count deleted."""

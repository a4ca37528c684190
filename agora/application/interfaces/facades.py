"""Cross-module facade contracts (anti-corruption layer ports).

Each module exposes a narrow, read-only facade; other modules never touch its
repository. All methods may raise ResourceNotFoundException where a missing
entity must be told apart from a False answer, and ValidationException for a
malformed id.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from agora.application.dtos.post import PostResult
    from agora.domain.enums import CommunityRole, PostKind


class ICommunitiesFacade(Protocol):
    """Read-only view of the communities module."""

    async def exists(self, community_id: str) -> bool:
        """Return whether the community exists."""

    async def is_private(self, community_id: str) -> bool:
        """Return the privacy flag. Raises ResourceNotFoundException when missing."""

    async def owner_id(self, community_id: str) -> str:
        """Return the recorded owner id (either identity representation)."""

    async def is_owner(self, community_id: str, candidate_id: str) -> bool:
        """Return whether candidate_id equals the recorded owner id (no reconciliation)."""


class IUsersFacade(Protocol):
    """Read-only view of the users module."""

    async def exists(self, user_id: str) -> bool:
        """Return whether a user with this primary identity exists."""

    async def profile_id_of(self, user_id: str) -> str | None:
        """Return the user's profile id, or None when the user is unknown."""

    async def role_name_valid(self, name: str) -> bool:
        """Return whether name is a known community role."""


class ISubscriptionsFacade(Protocol):
    """Read-only view of the subscriptions module."""

    async def role_of(self, user_id: str, community_id: str) -> CommunityRole | None:
        """Return the user's role in the community, or None when not subscribed."""

    async def is_subscribed(self, user_id: str, community_id: str) -> bool:
        """Return whether a subscription exists."""

    async def community_ids_of(self, user_id: str) -> list[str]:
        """Return ids of communities the user is subscribed to."""


class IPostsFacade(Protocol):
    """Read-only view of the posts module."""

    async def exists(self, post_id: str) -> bool:
        """Return whether the post exists."""

    async def posts_by_communities(
        self,
        community_ids: list[str],
        kind: PostKind | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[PostResult]:
        """Return posts of the given communities, newest first."""

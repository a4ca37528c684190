"""Service interfaces (ports) for the application layer.

Write-side ports used only by compensating actions, and the decision log.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from agora.application.dtos.subscription import SubscriptionResult
    from agora.application.services.decision_log import DecisionRecord


class IDecisionLog(Protocol):
    """Sink for one immutable record per authorization gate evaluation."""

    def record(self, decision: DecisionRecord) -> None:
        """Store or emit the record. Must not raise."""


class ISubscriptionProvisioning(Protocol):
    """Subscription writes issued by the communities module."""

    async def grant_owner_subscription(
        self, owner_id: str, community_id: str
    ) -> SubscriptionResult:
        """Create the owner-role subscription keyed by the owner's user id."""

    async def revoke_all_for_community(self, community_id: str) -> int:
        """Delete every subscription of the community; return count deleted."""


class IPostsCleanup(Protocol):
    """Post writes issued by the communities module on deletion."""

    async def post_ids_of_community(self, community_id: str) -> list[str]:
        """Return ids of all posts in the community."""

    async def delete_all_for_community(self, community_id: str) -> int:
        """Delete every post of the community; return count deleted."""


class IReactionsCleanup(Protocol):
    """Reaction writes issued when posts go away."""

    async def delete_for_posts(self, post_ids: list[str]) -> int:
        """Delete reactions of the given posts; return count deleted."""

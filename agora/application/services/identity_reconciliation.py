"""Cross-module call policy and owner identity reconciliation.

Communities may record their owner under either of a user's two identities
(user id or profile id). resolve_ownership_with_identity_fallback is the one
place that skew is handled; delete it once historical data is migrated.
"""

from __future__ import annotations

from collections.abc import Awaitable
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from agora.domain.exceptions import AgoraException, FacadeCallException
from agora.shared.telemetry.logging import get_logger
from agora.shared.telemetry.tracing import add_span_event

if TYPE_CHECKING:
    from agora.application.interfaces.facades import ICommunitiesFacade, IUsersFacade

logger = get_logger(__name__)

MATCHED_VIA_USER_ID = "user_id"
MATCHED_VIA_PROFILE_ID = "profile_id"

T = TypeVar("T")


async def call_facade(awaitable: Awaitable[T], *, facade: str, operation: str) -> T:
    """Await a facade call and apply the failure policy.

    Domain exceptions pass through unchanged. Any other Exception is an
    infrastructure failure and becomes FacadeCallException. Cancellation is
    not intercepted. No retries.
    """
    try:
        return await awaitable
    except AgoraException:
        raise
    except Exception as e:
        logger.error(
            "Facade call %s.%s failed: %s", facade, operation, e, exc_info=True
        )
        raise FacadeCallException(facade, operation, type(e).__name__) from e


@dataclass(frozen=True)
class OwnershipResolution:
    """Result of the reconciled owner check. matched_via is None when not owner."""

    is_owner: bool
    matched_via: str | None = None

    @property
    def via_profile_id(self) -> bool:
        return self.matched_via == MATCHED_VIA_PROFILE_ID


NOT_OWNER = OwnershipResolution(is_owner=False)


async def resolve_ownership_with_identity_fallback(
    communities: ICommunitiesFacade,
    users: IUsersFacade,
    community_id: str,
    user_id: str,
) -> OwnershipResolution:
    """Return whether user_id owns the community under either identity.

    1. Owner check with the user id.
    2. Otherwise look up the user's profile id and, when it differs, repeat
       the owner check with it.
    """
    if await call_facade(
        communities.is_owner(community_id, user_id),
        facade="communities",
        operation="is_owner",
    ):
        return OwnershipResolution(is_owner=True, matched_via=MATCHED_VIA_USER_ID)

    profile_id = await call_facade(
        users.profile_id_of(user_id), facade="users", operation="profile_id_of"
    )
    if not profile_id or profile_id == user_id:
        return NOT_OWNER

    if await call_facade(
        communities.is_owner(community_id, profile_id),
        facade="communities",
        operation="is_owner",
    ):
        logger.info(
            "Owner of community %s matched via profile id for user %s",
            community_id,
            user_id,
        )
        add_span_event(
            "ownership.profile_id_fallback",
            {"community_id": community_id, "user_id": user_id},
        )
        return OwnershipResolution(is_owner=True, matched_via=MATCHED_VIA_PROFILE_ID)
    return NOT_OWNER

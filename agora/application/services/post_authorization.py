"""Post authorization: effective role resolution and the publish/delete gates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from agora.application.services.identity_reconciliation import (
    MATCHED_VIA_USER_ID,
    call_facade,
    resolve_ownership_with_identity_fallback,
)
from agora.application.services.policy import Decision
from agora.domain.enums import CommunityRole, PostKind

if TYPE_CHECKING:
    from agora.application.interfaces.facades import (
        ICommunitiesFacade,
        ISubscriptionsFacade,
        IUsersFacade,
    )

RULE_PUBLISH_REQUIRES_MEMBERSHIP = "publish_requires_membership"
RULE_ANNOUNCEMENT_REQUIRES_ADMIN = "announcement_requires_admin"
RULE_MESSAGE_REQUIRES_MEMBERSHIP = "message_requires_membership"
RULE_DELETE_REQUIRES_ADMIN = "delete_requires_admin"
RULE_ROLE_PERMITS_KIND = "role_permits_kind"
RULE_ROLE_PERMITS_DELETE = "role_permits_delete"


@dataclass(frozen=True)
class EffectiveRole:
    """Role used for one decision.

    via_ownership_fallback is True when the role was raised to owner by the
    reconciled owner check; that role is never persisted.
    """

    role: CommunityRole | None
    via_ownership_fallback: bool = False
    matched_via: str | None = None

    @property
    def is_admin_or_owner(self) -> bool:
        return self.role is not None and self.role.is_admin_or_owner


class EffectiveRoleResolver:
    """Resolves a user's role in a community, falling back to ownership."""

    def __init__(
        self,
        communities: ICommunitiesFacade,
        users: IUsersFacade,
        subscriptions: ISubscriptionsFacade,
    ) -> None:
        self.communities = communities
        self.users = users
        self.subscriptions = subscriptions

    async def resolve(
        self, user_id: str, community_id: str, *, identity_fallback: bool = True
    ) -> EffectiveRole:
        """Return the subscription role, raised to owner when the user owns the community.

        The ownership check runs only when the stored role is missing or below
        admin. With identity_fallback=False only the user id is compared.
        """
        role = await call_facade(
            self.subscriptions.role_of(user_id, community_id),
            facade="subscriptions",
            operation="role_of",
        )
        if role is not None and role.is_admin_or_owner:
            return EffectiveRole(role)

        if identity_fallback:
            ownership = await resolve_ownership_with_identity_fallback(
                self.communities, self.users, community_id, user_id
            )
            is_owner, matched_via = ownership.is_owner, ownership.matched_via
        else:
            is_owner = await call_facade(
                self.communities.is_owner(community_id, user_id),
                facade="communities",
                operation="is_owner",
            )
            matched_via = MATCHED_VIA_USER_ID if is_owner else None

        if is_owner:
            return EffectiveRole(
                CommunityRole.OWNER, via_ownership_fallback=True, matched_via=matched_via
            )
        return EffectiveRole(role)


def evaluate_publish(effective: EffectiveRole, kind: PostKind) -> Decision:
    """Membership gate then kind gate."""
    if effective.role is None:
        return Decision.deny(
            RULE_PUBLISH_REQUIRES_MEMBERSHIP, "only members/owners can publish"
        )
    if kind.permits(effective.role):
        return Decision.allow(RULE_ROLE_PERMITS_KIND)
    if kind is PostKind.ANNOUNCEMENT:
        return Decision.deny(
            RULE_ANNOUNCEMENT_REQUIRES_ADMIN,
            "only admins or owners can publish announcements",
        )
    return Decision.deny(
        RULE_MESSAGE_REQUIRES_MEMBERSHIP, "only members/owners can publish"
    )


def evaluate_delete(effective: EffectiveRole) -> Decision:
    if effective.is_admin_or_owner:
        return Decision.allow(RULE_ROLE_PERMITS_DELETE)
    return Decision.deny(
        RULE_DELETE_REQUIRES_ADMIN, "only admins or owners can delete posts"
    )

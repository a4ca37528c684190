"""Subscription authorization: pure decision functions over gathered facts.

Facts are collected by SubscriptionCommandService through the facades; the
functions here never perform I/O.
"""

from __future__ import annotations

from dataclasses import dataclass

from agora.application.services.policy import Decision
from agora.domain.enums import CommunityRole

RULE_SELF_SUBSCRIPTION = "self_subscription"
RULE_PRIVILEGED_DELEGATION = "privileged_delegation"
RULE_PRIVATE_DELEGATION_REQUIRES_PRIVILEGE = "private_delegation_requires_privilege"
RULE_PUBLIC_SELF_SUBSCRIPTION_ONLY = "public_self_subscription_only"
RULE_SELF_UNSUBSCRIPTION = "self_unsubscription"
RULE_UNSUBSCRIBE_REQUIRES_PRIVILEGE = "unsubscribe_requires_privilege"
RULE_OWNER_CANNOT_UNSUBSCRIBE = "owner_cannot_unsubscribe"
RULE_OWNER_GRANT_REQUIRES_OWNERSHIP = "owner_grant_requires_ownership"
RULE_RECORDED_OWNER = "recorded_owner"
RULE_ALREADY_SUBSCRIBED = "already_subscribed"
RULE_ROLE_UPDATE_UNSUPPORTED = "role_update_unsupported"


@dataclass(frozen=True)
class RequesterPrivilege:
    """Requester's standing in a community (ownership is identity-reconciled)."""

    is_owner: bool = False
    role: CommunityRole | None = None

    @property
    def is_privileged(self) -> bool:
        return self.is_owner or (self.role is not None and self.role.is_admin_or_owner)


@dataclass(frozen=True)
class SubscribeFacts:
    """Snapshot of everything the subscribe policy needs."""

    is_self: bool
    is_private: bool
    requested_role: CommunityRole
    requester: RequesterPrivilege = RequesterPrivilege()


@dataclass(frozen=True)
class UnsubscribeFacts:
    """Snapshot of everything the unsubscribe policy needs."""

    is_self: bool
    target_is_owner: bool
    requester: RequesterPrivilege = RequesterPrivilege()


def resolve_granted_role(is_self: bool, requested_role: CommunityRole) -> CommunityRole:
    """Return the role to persist. Self-subscription always yields member."""
    if is_self:
        return CommunityRole.MEMBER
    return requested_role


def evaluate_subscribe(facts: SubscribeFacts) -> Decision:
    """Apply the subscribe policy gate.

    Self requests are allowed. Public communities have no delegated path.
    Private communities accept delegation from the owner or an admin.
    """
    if facts.is_self:
        return Decision.allow(RULE_SELF_SUBSCRIPTION)
    if not facts.is_private:
        return Decision.deny(
            RULE_PUBLIC_SELF_SUBSCRIPTION_ONLY,
            "users can only subscribe themselves to public communities",
        )
    if facts.requester.is_privileged:
        return Decision.allow(RULE_PRIVILEGED_DELEGATION)
    return Decision.deny(
        RULE_PRIVATE_DELEGATION_REQUIRES_PRIVILEGE,
        "only owner or admins can add users to private communities",
    )


def evaluate_unsubscribe(facts: UnsubscribeFacts) -> Decision:
    """Apply the unsubscribe policy gate.

    Removing someone else requires privilege. The owner can never be
    removed, not even by themselves.
    """
    if not facts.is_self and not facts.requester.is_privileged:
        return Decision.deny(
            RULE_UNSUBSCRIBE_REQUIRES_PRIVILEGE,
            "only owner or admins can unsubscribe other users",
        )
    if facts.target_is_owner:
        return Decision.deny(
            RULE_OWNER_CANNOT_UNSUBSCRIBE,
            "owner cannot unsubscribe from their own community",
        )
    if facts.is_self:
        return Decision.allow(RULE_SELF_UNSUBSCRIPTION)
    return Decision.allow(RULE_PRIVILEGED_DELEGATION)


def evaluate_owner_grant(is_recorded_owner: bool) -> Decision:
    """Only the community's recorded owner may receive the owner subscription."""
    if is_recorded_owner:
        return Decision.allow(RULE_RECORDED_OWNER)
    return Decision.deny(
        RULE_OWNER_GRANT_REQUIRES_OWNERSHIP,
        "owner subscription can only be granted to the community owner",
    )

"""Pure subscription policy functions (no I/O)."""

import pytest

from agora.application.services.subscription_authorization import (
    RULE_OWNER_CANNOT_UNSUBSCRIBE,
    RULE_OWNER_GRANT_REQUIRES_OWNERSHIP,
    RULE_PRIVATE_DELEGATION_REQUIRES_PRIVILEGE,
    RULE_PUBLIC_SELF_SUBSCRIPTION_ONLY,
    RULE_UNSUBSCRIBE_REQUIRES_PRIVILEGE,
    RequesterPrivilege,
    SubscribeFacts,
    UnsubscribeFacts,
    evaluate_owner_grant,
    evaluate_subscribe,
    evaluate_unsubscribe,
    resolve_granted_role,
)
from agora.domain.enums import CommunityRole
from agora.domain.exceptions import AuthorizationException


@pytest.mark.parametrize("role", list(CommunityRole))
def test_self_subscription_always_grants_member(role: CommunityRole) -> None:
    """Whatever role is requested, a self request yields member."""
    assert resolve_granted_role(True, role) is CommunityRole.MEMBER


def test_delegated_subscription_keeps_requested_role() -> None:
    assert resolve_granted_role(False, CommunityRole.ADMIN) is CommunityRole.ADMIN


@pytest.mark.parametrize("is_private", [True, False])
def test_self_subscribe_allowed_in_any_privacy(is_private: bool) -> None:
    facts = SubscribeFacts(
        is_self=True, is_private=is_private, requested_role=CommunityRole.OWNER
    )
    assert evaluate_subscribe(facts).allowed


@pytest.mark.parametrize(
    "requester",
    [
        RequesterPrivilege(),
        RequesterPrivilege(is_owner=True),
        RequesterPrivilege(role=CommunityRole.ADMIN),
    ],
)
def test_public_community_rejects_any_delegation(requester: RequesterPrivilege) -> None:
    """Public communities have no delegated path, even for the owner."""
    decision = evaluate_subscribe(
        SubscribeFacts(
            is_self=False,
            is_private=False,
            requested_role=CommunityRole.MEMBER,
            requester=requester,
        )
    )
    assert not decision.allowed
    assert decision.rule == RULE_PUBLIC_SELF_SUBSCRIPTION_ONLY


@pytest.mark.parametrize(
    ("requester", "allowed"),
    [
        (RequesterPrivilege(is_owner=True), True),
        (RequesterPrivilege(role=CommunityRole.ADMIN), True),
        (RequesterPrivilege(role=CommunityRole.OWNER), True),
        (RequesterPrivilege(role=CommunityRole.MEMBER), False),
        (RequesterPrivilege(), False),
    ],
)
def test_private_delegation_requires_privilege(
    requester: RequesterPrivilege, allowed: bool
) -> None:
    decision = evaluate_subscribe(
        SubscribeFacts(
            is_self=False,
            is_private=True,
            requested_role=CommunityRole.ADMIN,
            requester=requester,
        )
    )
    assert decision.allowed is allowed
    if not allowed:
        assert decision.rule == RULE_PRIVATE_DELEGATION_REQUIRES_PRIVILEGE


def test_denied_decision_raises_with_rule() -> None:
    decision = evaluate_subscribe(
        SubscribeFacts(
            is_self=False, is_private=False, requested_role=CommunityRole.MEMBER
        )
    )
    with pytest.raises(AuthorizationException) as exc_info:
        decision.raise_if_denied()
    assert exc_info.value.rule == RULE_PUBLIC_SELF_SUBSCRIPTION_ONLY
    assert "public" in exc_info.value.message


def test_owner_cannot_unsubscribe_themselves() -> None:
    decision = evaluate_unsubscribe(UnsubscribeFacts(is_self=True, target_is_owner=True))
    assert decision.rule == RULE_OWNER_CANNOT_UNSUBSCRIBE


def test_admin_cannot_remove_owner() -> None:
    decision = evaluate_unsubscribe(
        UnsubscribeFacts(
            is_self=False,
            target_is_owner=True,
            requester=RequesterPrivilege(role=CommunityRole.ADMIN),
        )
    )
    assert decision.rule == RULE_OWNER_CANNOT_UNSUBSCRIBE


def test_unprivileged_removal_checked_before_owner_rule() -> None:
    """A member trying to remove the owner is told they lack privilege."""
    decision = evaluate_unsubscribe(
        UnsubscribeFacts(
            is_self=False,
            target_is_owner=True,
            requester=RequesterPrivilege(role=CommunityRole.MEMBER),
        )
    )
    assert decision.rule == RULE_UNSUBSCRIBE_REQUIRES_PRIVILEGE


def test_self_and_privileged_unsubscribe_allowed() -> None:
    assert evaluate_unsubscribe(UnsubscribeFacts(is_self=True, target_is_owner=False)).allowed
    assert evaluate_unsubscribe(
        UnsubscribeFacts(
            is_self=False,
            target_is_owner=False,
            requester=RequesterPrivilege(is_owner=True),
        )
    ).allowed


def test_owner_grant_requires_recorded_owner() -> None:
    assert evaluate_owner_grant(True).allowed
    denied = evaluate_owner_grant(False)
    assert denied.rule == RULE_OWNER_GRANT_REQUIRES_OWNERSHIP

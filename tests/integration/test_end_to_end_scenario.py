"""End-to-end authorization scenarios over the in-memory container."""

import uuid

import pytest

from agora.domain.entities import CommunityEntity
from agora.domain.enums import CommunityRole, DecisionOutcome, PostKind
from agora.domain.exceptions import (
    AuthorizationException,
    SubscriptionConflictException,
    UnsupportedOperationException,
)
from agora.domain.value_objects import CommunityName, Description

DESCRIPTION = "Gardening tips for small balconies"
CONTENT = "# Seedlings\nTomatoes are up!"


async def test_owner_member_outsider_scenario(container, register_user, decision_log) -> None:
    """Create, publish, reject outsider, self-subscribe, reject member announcement, reject promotion."""
    owner = await register_user()
    outsider = await register_user()

    created = await container.communities.create_community(owner.user_id, "Balcony Garden", DESCRIPTION)
    community_id = created.community.id
    assert not created.compensation_pending
    owner_sub = await container.subscription_queries.get(owner.user_id, community_id)
    assert owner_sub.role is CommunityRole.OWNER

    await container.posts.publish_post(owner.user_id, community_id, CONTENT)

    with pytest.raises(AuthorizationException) as exc_info:
        await container.posts.publish_post(outsider.user_id, community_id, CONTENT)
    assert exc_info.value.rule == "publish_requires_membership"

    await container.subscriptions.subscribe(
        outsider.user_id, outsider.user_id, community_id, CommunityRole.ADMIN
    )
    member_sub = await container.subscription_queries.get(outsider.user_id, community_id)
    assert member_sub.role is CommunityRole.MEMBER

    with pytest.raises(AuthorizationException) as exc_info:
        await container.posts.publish_post(
            outsider.user_id, community_id, CONTENT, PostKind.ANNOUNCEMENT
        )
    assert exc_info.value.rule == "announcement_requires_admin"

    with pytest.raises(UnsupportedOperationException):
        await container.subscriptions.change_role(
            owner.user_id, outsider.user_id, community_id, "admin"
        )
    still_member = await container.subscription_queries.get(outsider.user_id, community_id)
    assert still_member.role is CommunityRole.MEMBER

    # A member's plain message is fine.
    await container.posts.publish_post(outsider.user_id, community_id, CONTENT)
    posts = await container.post_queries.list_by_community(community_id)
    assert len(posts) == 2

    denied_rules = [r.rule for r in decision_log.denials()]
    assert denied_rules == [
        "publish_requires_membership",
        "announcement_requires_admin",
        "role_update_unsupported",
    ]
    assert all(r.outcome is DecisionOutcome.DENY for r in decision_log.denials())


async def test_second_subscribe_conflicts_and_keeps_first_role(container, register_user) -> None:
    owner = await register_user()
    admin = await register_user()
    created = await container.communities.create_community(
        owner.user_id, "Private Garden", DESCRIPTION, is_private=True
    )
    community_id = created.community.id
    await container.subscriptions.subscribe(owner.user_id, admin.user_id, community_id, "admin")

    with pytest.raises(SubscriptionConflictException):
        await container.subscriptions.subscribe(admin.user_id, admin.user_id, community_id)

    sub = await container.subscription_queries.get(admin.user_id, community_id)
    assert sub.role is CommunityRole.ADMIN


async def test_owner_cannot_leave_or_be_removed(container, register_user) -> None:
    owner = await register_user()
    admin = await register_user()
    community_id = (
        await container.communities.create_community(
            owner.user_id, "Owner Garden", DESCRIPTION, is_private=True
        )
    ).community.id
    await container.subscriptions.subscribe(owner.user_id, admin.user_id, community_id, "admin")

    for requester in (owner.user_id, admin.user_id):
        with pytest.raises(AuthorizationException) as exc_info:
            await container.subscriptions.unsubscribe(requester, owner.user_id, community_id)
        assert exc_info.value.rule == "owner_cannot_unsubscribe"

    assert await container.subscription_queries.count_by_community(community_id) == 2
    await container.subscriptions.unsubscribe(owner.user_id, admin.user_id, community_id)
    assert await container.subscription_queries.count_by_community(community_id) == 1


async def test_legacy_owner_recorded_by_profile_id_publishes(container, register_user) -> None:
    """Owner stored under the profile id publishes with the user id and no subscription."""
    owner = await register_user()
    stranger = await register_user()
    community_id = str(uuid.uuid4())
    await container.communities.community_repo.add(
        CommunityEntity(
            id=community_id,
            owner_id=owner.profile_id,
            name=CommunityName("Legacy Garden"),
            description=Description(DESCRIPTION),
        )
    )

    post_id = await container.posts.publish_post(
        owner.user_id, community_id, CONTENT, PostKind.ANNOUNCEMENT
    )
    assert (await container.post_queries.get_by_id(str(post_id))).kind is PostKind.ANNOUNCEMENT

    with pytest.raises(AuthorizationException):
        await container.posts.publish_post(stranger.user_id, community_id, CONTENT)

    outcome = await container.posts.delete_post(owner.user_id, str(post_id))
    assert not outcome.compensation_pending

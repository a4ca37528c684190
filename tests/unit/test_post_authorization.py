"""Post authorization: effective role resolution and PostCommandService gates."""

import uuid
from unittest.mock import AsyncMock

import pytest

from agora.application.services.decision_log import InMemoryDecisionLog
from agora.application.services.post_authorization import (
    EffectiveRole,
    EffectiveRoleResolver,
    evaluate_delete,
    evaluate_publish,
)
from agora.application.use_cases.posts import PostCommandService
from agora.domain.entities import PostEntity
from agora.domain.enums import CommunityRole, PostKind
from agora.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from agora.domain.value_objects import PostContent
from agora.shared.utils.generators import generate_document_id

COMMUNITY = str(uuid.uuid4())
USER = str(uuid.uuid4())
PROFILE = str(uuid.uuid4())
CONTENT = "# Weekly update\nNothing new this week."


def _facades(*, role: CommunityRole | None = None, recorded_owner: str | None = None):
    communities = AsyncMock()
    communities.exists.return_value = True
    communities.is_owner.side_effect = lambda cid, candidate: candidate == recorded_owner
    users = AsyncMock()
    users.exists.return_value = True
    users.profile_id_of.return_value = PROFILE
    subscriptions = AsyncMock()
    subscriptions.role_of.return_value = role
    return communities, users, subscriptions


def _service(*, role=None, recorded_owner=None, post=None, identity_fallback_on_delete=True):
    communities, users, subscriptions = _facades(role=role, recorded_owner=recorded_owner)
    repo = AsyncMock()
    repo.add.side_effect = lambda entity: entity
    repo.get_by_id.return_value = post
    repo.delete.return_value = True
    cleanup = AsyncMock()
    cleanup.delete_for_posts.return_value = 3
    log = InMemoryDecisionLog()
    svc = PostCommandService(
        post_repo=repo,
        communities=communities,
        users=users,
        subscriptions=subscriptions,
        reactions_cleanup=cleanup,
        decision_log=log,
        identity_fallback_on_delete=identity_fallback_on_delete,
    )
    return svc, repo, cleanup, communities, log


def _post() -> PostEntity:
    return PostEntity(
        id=generate_document_id(),
        community_id=COMMUNITY,
        author_id=str(uuid.uuid4()),
        content=PostContent(CONTENT),
    )


async def test_resolver_returns_stored_admin_role_without_owner_check() -> None:
    communities, users, subscriptions = _facades(role=CommunityRole.ADMIN)
    resolver = EffectiveRoleResolver(communities, users, subscriptions)

    effective = await resolver.resolve(USER, COMMUNITY)

    assert effective == EffectiveRole(CommunityRole.ADMIN)
    communities.is_owner.assert_not_awaited()


async def test_resolver_raises_member_to_owner_via_profile_id() -> None:
    """A member whose profile id is the recorded owner is treated as owner."""
    communities, users, subscriptions = _facades(
        role=CommunityRole.MEMBER, recorded_owner=PROFILE
    )
    resolver = EffectiveRoleResolver(communities, users, subscriptions)

    effective = await resolver.resolve(USER, COMMUNITY)

    assert effective.role is CommunityRole.OWNER
    assert effective.via_ownership_fallback
    assert effective.matched_via == "profile_id"


async def test_resolver_without_identity_fallback_compares_user_id_only() -> None:
    communities, users, subscriptions = _facades(recorded_owner=PROFILE)
    resolver = EffectiveRoleResolver(communities, users, subscriptions)

    effective = await resolver.resolve(USER, COMMUNITY, identity_fallback=False)

    assert effective.role is None
    users.profile_id_of.assert_not_awaited()


async def test_resolver_keeps_missing_role_for_non_owner() -> None:
    communities, users, subscriptions = _facades()
    resolver = EffectiveRoleResolver(communities, users, subscriptions)

    assert (await resolver.resolve(USER, COMMUNITY)).role is None


@pytest.mark.parametrize(
    ("role", "kind", "rule"),
    [
        (None, PostKind.MESSAGE, "publish_requires_membership"),
        (None, PostKind.ANNOUNCEMENT, "publish_requires_membership"),
        (CommunityRole.MEMBER, PostKind.ANNOUNCEMENT, "announcement_requires_admin"),
    ],
)
def test_evaluate_publish_denials(role, kind: PostKind, rule: str) -> None:
    decision = evaluate_publish(EffectiveRole(role), kind)
    assert not decision.allowed
    assert decision.rule == rule


@pytest.mark.parametrize(
    ("role", "kind"),
    [
        (CommunityRole.MEMBER, PostKind.MESSAGE),
        (CommunityRole.ADMIN, PostKind.ANNOUNCEMENT),
        (CommunityRole.OWNER, PostKind.ANNOUNCEMENT),
    ],
)
def test_evaluate_publish_allows(role: CommunityRole, kind: PostKind) -> None:
    assert evaluate_publish(EffectiveRole(role), kind).allowed


def test_evaluate_delete_requires_admin_or_owner() -> None:
    assert not evaluate_delete(EffectiveRole(CommunityRole.MEMBER)).allowed
    assert not evaluate_delete(EffectiveRole(None)).allowed
    assert evaluate_delete(EffectiveRole(CommunityRole.ADMIN)).allowed


async def test_owner_without_subscription_publishes_announcement() -> None:
    """Ownership under the profile id substitutes for a missing subscription."""
    svc, repo, _, _, _ = _service(recorded_owner=PROFILE)

    post_id = await svc.publish_post(USER, COMMUNITY, CONTENT, "announcement")

    stored = repo.add.await_args.args[0]
    assert stored.kind is PostKind.ANNOUNCEMENT
    assert stored.id == post_id.value


async def test_member_announcement_denied_without_write() -> None:
    svc, repo, _, _, log = _service(role=CommunityRole.MEMBER)

    with pytest.raises(AuthorizationException) as exc_info:
        await svc.publish_post(USER, COMMUNITY, CONTENT, PostKind.ANNOUNCEMENT)

    assert exc_info.value.rule == "announcement_requires_admin"
    repo.add.assert_not_awaited()
    assert log.denials()[0].rule == "announcement_requires_admin"


async def test_non_member_cannot_publish() -> None:
    svc, repo, _, _, _ = _service()

    with pytest.raises(AuthorizationException) as exc_info:
        await svc.publish_post(USER, COMMUNITY, CONTENT)

    assert exc_info.value.rule == "publish_requires_membership"
    repo.add.assert_not_awaited()


async def test_publish_requires_line_break_in_content() -> None:
    svc, _, _, communities, _ = _service(role=CommunityRole.MEMBER)

    with pytest.raises(ValidationException) as exc_info:
        await svc.publish_post(USER, COMMUNITY, "one line only")

    assert exc_info.value.details == {"field": "content"}
    communities.exists.assert_not_awaited()


async def test_publish_in_missing_community_not_found() -> None:
    svc, repo, _, communities, _ = _service(role=CommunityRole.MEMBER)
    communities.exists.return_value = False

    with pytest.raises(ResourceNotFoundException):
        await svc.publish_post(USER, COMMUNITY, CONTENT)

    repo.add.assert_not_awaited()


async def test_delete_missing_post_not_found() -> None:
    svc, repo, _, _, _ = _service(role=CommunityRole.ADMIN)

    with pytest.raises(ResourceNotFoundException):
        await svc.delete_post(USER, generate_document_id())

    repo.delete.assert_not_awaited()


async def test_member_cannot_delete_post() -> None:
    svc, repo, cleanup, _, _ = _service(role=CommunityRole.MEMBER, post=_post())

    with pytest.raises(AuthorizationException) as exc_info:
        await svc.delete_post(USER, generate_document_id())

    assert exc_info.value.rule == "delete_requires_admin"
    repo.delete.assert_not_awaited()
    cleanup.delete_for_posts.assert_not_awaited()


async def test_admin_deletes_post_and_reactions() -> None:
    post = _post()
    svc, repo, cleanup, _, _ = _service(role=CommunityRole.ADMIN, post=post)

    outcome = await svc.delete_post(USER, post.id)

    repo.delete.assert_awaited_once_with(post.id)
    cleanup.delete_for_posts.assert_awaited_once_with([post.id])
    assert outcome.reactions_deleted == 3
    assert not outcome.compensation_pending


async def test_owner_by_profile_id_deletes_when_fallback_enabled() -> None:
    post = _post()
    svc, repo, _, _, _ = _service(recorded_owner=PROFILE, post=post)

    await svc.delete_post(USER, post.id)

    repo.delete.assert_awaited_once_with(post.id)


async def test_owner_by_profile_id_denied_when_fallback_disabled() -> None:
    post = _post()
    svc, repo, _, _, _ = _service(
        recorded_owner=PROFILE, post=post, identity_fallback_on_delete=False
    )

    with pytest.raises(AuthorizationException):
        await svc.delete_post(USER, post.id)

    repo.delete.assert_not_awaited()


async def test_failed_reaction_cleanup_reports_pending_compensation() -> None:
    """The post stays deleted and the failure is reported, not raised."""
    post = _post()
    svc, repo, cleanup, _, _ = _service(role=CommunityRole.OWNER, post=post)
    cleanup.delete_for_posts.side_effect = ConnectionError("reactions store down")

    outcome = await svc.delete_post(USER, post.id)

    repo.delete.assert_awaited_once_with(post.id)
    assert outcome.compensation_pending
    assert outcome.compensation_error == "reactions store down"
    assert outcome.reactions_deleted == 0


async def test_reaction_cleanup_programming_error_propagates() -> None:
    post = _post()
    svc, _, cleanup, _, _ = _service(role=CommunityRole.OWNER, post=post)
    cleanup.delete_for_posts.side_effect = TypeError("bad call")

    with pytest.raises(TypeError):
        await svc.delete_post(USER, post.id)

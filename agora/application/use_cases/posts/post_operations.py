"""Post operations: the post authorization engine and post queries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from agora.application.dtos.common import parse_value
from agora.application.dtos.post import (
    DeletePostCommand,
    PostDeletionOutcome,
    PostResult,
    PublishPostCommand,
)
from agora.application.services.decision_log import NullDecisionLog
from agora.application.services.identity_reconciliation import call_facade
from agora.application.services.policy import GateRecorder
from agora.application.services.post_authorization import (
    EffectiveRoleResolver,
    evaluate_delete,
    evaluate_publish,
)
from agora.domain.entities import PostEntity
from agora.domain.enums import PostKind
from agora.domain.exceptions import ResourceNotFoundException
from agora.domain.value_objects import CommunityId, PostId
from agora.shared.telemetry.logging import get_logger
from agora.shared.telemetry.tracing import add_span_attributes, traced
from agora.shared.utils.generators import generate_document_id

if TYPE_CHECKING:
    from agora.application.interfaces.facades import (
        ICommunitiesFacade,
        ISubscriptionsFacade,
        IUsersFacade,
    )
    from agora.application.interfaces.repositories import IPostRepository
    from agora.application.interfaces.services import IDecisionLog, IReactionsCleanup

logger = get_logger(__name__)


class PostCommandService:
    """Publish and delete posts, gated on the caller's effective community role.

    identity_fallback_on_delete controls whether delete authorization also
    matches ownership through the profile id (publish always does).
    """

    def __init__(
        self,
        post_repo: IPostRepository,
        communities: ICommunitiesFacade,
        users: IUsersFacade,
        subscriptions: ISubscriptionsFacade,
        reactions_cleanup: IReactionsCleanup | None = None,
        decision_log: IDecisionLog | None = None,
        *,
        identity_fallback_on_delete: bool = True,
    ) -> None:
        self.post_repo = post_repo
        self.communities = communities
        self.users = users
        self.reactions_cleanup = reactions_cleanup
        self.decision_log = decision_log or NullDecisionLog()
        self.identity_fallback_on_delete = identity_fallback_on_delete
        self.role_resolver = EffectiveRoleResolver(communities, users, subscriptions)

    @traced("posts.publish_post")
    async def publish_post(
        self,
        author_id: str,
        community_id: str,
        content: str,
        kind: str | PostKind = PostKind.MESSAGE,
        images: list[str] | None = None,
    ) -> PostId:
        """Publish a post in a community.

        Authors without a subscription may still publish when they own the
        community (under either identity). Announcements need admin or owner.

        Raises:
            ValidationException: Malformed input.
            ResourceNotFoundException: Community or author missing.
            AuthorizationException: publish_requires_membership or announcement_requires_admin.
        """
        cmd = PublishPostCommand.create(author_id, community_id, content, kind, images)
        cid = str(cmd.community_id)
        author = str(cmd.author_id)
        gates = GateRecorder(
            self.decision_log, "publish_post", actor_id=author, community_id=cid
        )

        if not await call_facade(
            self.communities.exists(cid), facade="communities", operation="exists"
        ):
            gates.deny("existence", "community_not_found")
            raise ResourceNotFoundException("community", cid)
        if not await call_facade(
            self.users.exists(author), facade="users", operation="exists"
        ):
            gates.deny("existence", "user_not_found")
            raise ResourceNotFoundException("user", author)

        effective = await self.role_resolver.resolve(author, cid)
        gates.enforce("policy", evaluate_publish(effective, cmd.kind))

        post = await self.post_repo.add(
            PostEntity(
                id=generate_document_id(),
                community_id=cid,
                author_id=author,
                content=cmd.content,
                kind=cmd.kind,
                images=cmd.images,
            )
        )
        add_span_attributes(
            effective_role=effective.role.value if effective.role else "none",
            via_ownership_fallback=effective.via_ownership_fallback,
        )
        logger.info(
            "Post %s (%s) published in community %s by %s",
            post.id,
            cmd.kind.value,
            cid,
            author,
        )
        return PostId(post.id)

    @traced("posts.delete_post")
    async def delete_post(self, requested_by: str, post_id: str) -> PostDeletionOutcome:
        """Delete a post, then remove its reactions as a best-effort follow-up.

        Raises:
            ResourceNotFoundException: Post missing.
            AuthorizationException: delete_requires_admin.
        """
        cmd = DeletePostCommand.create(requested_by, post_id)
        pid = str(cmd.post_id)
        requester = str(cmd.requested_by)
        gates = GateRecorder(
            self.decision_log, "delete_post", actor_id=requester, target_id=pid
        )

        post = await self.post_repo.get_by_id(pid)
        if post is None:
            gates.deny("existence", "post_not_found")
            raise ResourceNotFoundException("post", pid)
        gates.community_id = post.community_id

        effective = await self.role_resolver.resolve(
            requester,
            post.community_id,
            identity_fallback=self.identity_fallback_on_delete,
        )
        gates.enforce("policy", evaluate_delete(effective))

        await self.post_repo.delete(pid)
        logger.info(
            "Post %s deleted from community %s by %s", pid, post.community_id, requester
        )
        return await self._cleanup_reactions(pid)

    async def _cleanup_reactions(self, post_id: str) -> PostDeletionOutcome:
        if self.reactions_cleanup is None:
            return PostDeletionOutcome(post_id=post_id)
        try:
            deleted = await self.reactions_cleanup.delete_for_posts([post_id])
        except (AssertionError, AttributeError, NameError, TypeError):
            # Programming errors: do not mask.
            raise
        except Exception as e:
            logger.warning(
                "Reaction cleanup for deleted post %s failed: %s",
                post_id,
                e,
                exc_info=True,
            )
            return PostDeletionOutcome(
                post_id=post_id, compensation_pending=True, compensation_error=str(e)
            )
        return PostDeletionOutcome(post_id=post_id, reactions_deleted=deleted)


class PostQueryService:
    """Read-only post queries."""

    def __init__(self, post_repo: IPostRepository) -> None:
        self.post_repo = post_repo

    async def get_by_id(self, post_id: str) -> PostResult:
        """Return post; else raise ResourceNotFoundException."""
        pid = str(parse_value(PostId, post_id, "post_id"))
        post = await self.post_repo.get_by_id(pid)
        if post is None:
            raise ResourceNotFoundException("post", pid)
        return PostResult.from_entity(post)

    async def list_by_community(
        self, community_id: str, limit: int = 100, offset: int = 0
    ) -> list[PostResult]:
        """Return posts of a community, newest first."""
        cid = str(parse_value(CommunityId, community_id, "community_id"))
        posts = await self.post_repo.list_by_community(cid, skip=offset, limit=limit)
        return [PostResult.from_entity(p) for p in posts]

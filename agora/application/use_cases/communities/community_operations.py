"""Community operations: creation with owner provisioning, owner-only edits, deletion cascade."""

from __future__ import annotations

from collections.abc import Awaitable
from typing import TYPE_CHECKING

from agora.application.dtos.common import parse_optional, parse_value
from agora.application.dtos.community import (
    CommunityCreationOutcome,
    CommunityDeletionOutcome,
    CommunityResult,
    CreateCommunityCommand,
)
from agora.application.services.decision_log import NullDecisionLog
from agora.application.services.identity_reconciliation import (
    call_facade,
    resolve_ownership_with_identity_fallback,
)
from agora.application.services.policy import Decision, GateRecorder
from agora.domain.entities import CommunityEntity
from agora.domain.enums import Privacy
from agora.domain.exceptions import ResourceNotFoundException
from agora.domain.value_objects import (
    CommunityId,
    CommunityName,
    Description,
    ImageUrl,
    UserId,
)
from agora.shared.telemetry.logging import get_logger
from agora.shared.telemetry.tracing import traced
from agora.shared.utils.generators import generate_uuid

if TYPE_CHECKING:
    from agora.application.interfaces.facades import ICommunitiesFacade, IUsersFacade
    from agora.application.interfaces.repositories import ICommunityRepository
    from agora.application.interfaces.services import (
        IDecisionLog,
        IPostsCleanup,
        IReactionsCleanup,
        ISubscriptionProvisioning,
    )

logger = get_logger(__name__)

RULE_DELETE_COMMUNITY_REQUIRES_OWNER = "delete_community_requires_owner"
RULE_UPDATE_COMMUNITY_REQUIRES_OWNER = "update_community_requires_owner"
RULE_RETRY_OWNER_SUBSCRIPTION_REQUIRES_OWNER = "retry_owner_subscription_requires_owner"
RULE_RECORDED_OWNER = "recorded_owner"

CASCADE_REACTIONS = "reactions"
CASCADE_POSTS = "posts"
CASCADE_SUBSCRIPTIONS = "subscriptions"

_PROGRAMMING_ERRORS = (AssertionError, AttributeError, NameError, TypeError)


def evaluate_owner_action(is_owner: bool, rule: str, message: str) -> Decision:
    if is_owner:
        return Decision.allow(RULE_RECORDED_OWNER)
    return Decision.deny(rule, message)


class CommunityCommandService:
    """Create, edit and delete communities.

    Owner subscription creation and the deletion cascade are separate,
    non-transactional steps whose failures are reported in the outcome.
    """

    def __init__(
        self,
        community_repo: ICommunityRepository,
        communities: ICommunitiesFacade,
        users: IUsersFacade,
        provisioning: ISubscriptionProvisioning,
        posts_cleanup: IPostsCleanup | None = None,
        reactions_cleanup: IReactionsCleanup | None = None,
        decision_log: IDecisionLog | None = None,
    ) -> None:
        self.community_repo = community_repo
        self.communities = communities
        self.users = users
        self.provisioning = provisioning
        self.posts_cleanup = posts_cleanup
        self.reactions_cleanup = reactions_cleanup
        self.decision_log = decision_log or NullDecisionLog()

    async def _get_community(self, community_id: str) -> CommunityEntity:
        community = await self.community_repo.get_by_id(community_id)
        if community is None:
            raise ResourceNotFoundException("community", community_id)
        return community

    async def _require_owner(
        self, community_id: str, requested_by: str, operation: str, rule: str, message: str
    ) -> None:
        gates = GateRecorder(
            self.decision_log,
            operation,
            actor_id=requested_by,
            community_id=community_id,
        )
        ownership = await resolve_ownership_with_identity_fallback(
            self.communities, self.users, community_id, requested_by
        )
        gates.enforce("policy", evaluate_owner_action(ownership.is_owner, rule, message))

    async def _provision_owner(
        self, community: CommunityEntity, owner_user_id: str
    ) -> CommunityCreationOutcome:
        """Grant the owner subscription under owner_user_id, never the recorded owner_id.

        Legacy communities record their owner under the profile id, while
        subscriptions are keyed by user id.
        """
        try:
            await self.provisioning.grant_owner_subscription(owner_user_id, community.id)
        except _PROGRAMMING_ERRORS:
            raise
        except Exception as e:
            logger.warning(
                "Owner subscription for community %s (owner %s) not created: %s",
                community.id,
                owner_user_id,
                e,
                exc_info=True,
            )
            return CommunityCreationOutcome(
                community=CommunityResult.from_entity(community),
                compensation_pending=True,
                compensation_error=str(e),
            )
        return CommunityCreationOutcome(community=CommunityResult.from_entity(community))

    @traced("communities.create_community")
    async def create_community(
        self,
        owner_id: str,
        name: str,
        description: str,
        is_private: bool = False,
        icon_url: str | None = None,
        banner_url: str | None = None,
    ) -> CommunityCreationOutcome:
        """Create a community and its owner subscription.

        The community is committed first. If the owner subscription then
        fails, the outcome has compensation_pending=True and the community is
        kept; retry with retry_owner_subscription(community_id, owner_id).

        Raises:
            ValidationException: Malformed input.
            ResourceNotFoundException: Owner is not a registered user.
        """
        cmd = CreateCommunityCommand.create(
            owner_id, name, description, is_private, icon_url, banner_url
        )
        owner = str(cmd.owner_id)
        if not await call_facade(self.users.exists(owner), facade="users", operation="exists"):
            raise ResourceNotFoundException("user", owner)

        community = await self.community_repo.add(
            CommunityEntity(
                id=generate_uuid(),
                owner_id=owner,
                name=cmd.name,
                description=cmd.description,
                privacy=cmd.privacy,
                icon_url=cmd.icon_url,
                banner_url=cmd.banner_url,
            )
        )
        logger.info(
            "Community %s created by %s (%s)", community.id, owner, community.privacy.value
        )
        return await self._provision_owner(community, owner)

    @traced("communities.retry_owner_subscription")
    async def retry_owner_subscription(
        self, community_id: str, requested_by: str
    ) -> CommunityCreationOutcome:
        """Re-run the owner subscription step for an existing community.

        requested_by must own the community under either identity; the
        subscription is created under that user id.

        Raises:
            ResourceNotFoundException: Community missing.
            AuthorizationException: requested_by is not the owner.
        """
        cid = str(parse_value(CommunityId, community_id, "community_id"))
        requester = str(parse_value(UserId, requested_by, "requested_by"))
        community = await self._get_community(cid)
        await self._require_owner(
            cid,
            requester,
            "retry_owner_subscription",
            RULE_RETRY_OWNER_SUBSCRIPTION_REQUIRES_OWNER,
            "only the owner can complete the owner subscription",
        )
        return await self._provision_owner(community, requester)

    @traced("communities.update_privacy")
    async def update_privacy(
        self, community_id: str, requested_by: str, is_private: bool
    ) -> CommunityResult:
        """Owner-only. Existing subscriptions are kept."""
        cid = str(parse_value(CommunityId, community_id, "community_id"))
        requester = str(parse_value(UserId, requested_by, "requested_by"))
        community = await self._get_community(cid)
        await self._require_owner(
            cid,
            requester,
            "update_privacy",
            RULE_UPDATE_COMMUNITY_REQUIRES_OWNER,
            "only the owner can update community settings",
        )
        community.update_privacy(Privacy.from_flag(is_private))
        updated = await self.community_repo.update(community)
        return CommunityResult.from_entity(updated)

    @traced("communities.update_info")
    async def update_info(
        self,
        community_id: str,
        requested_by: str,
        name: str | None = None,
        description: str | None = None,
        icon_url: str | None = None,
        banner_url: str | None = None,
    ) -> CommunityResult:
        """Owner-only. None leaves a field unchanged."""
        cid = str(parse_value(CommunityId, community_id, "community_id"))
        requester = str(parse_value(UserId, requested_by, "requested_by"))
        new_name = parse_optional(CommunityName, name, "name")
        new_description = parse_optional(Description, description, "description")
        new_icon = parse_optional(ImageUrl, icon_url, "icon_url")
        new_banner = parse_optional(ImageUrl, banner_url, "banner_url")
        community = await self._get_community(cid)
        await self._require_owner(
            cid,
            requester,
            "update_info",
            RULE_UPDATE_COMMUNITY_REQUIRES_OWNER,
            "only the owner can update community settings",
        )
        community.update_info(new_name, new_description, new_icon, new_banner)
        updated = await self.community_repo.update(community)
        return CommunityResult.from_entity(updated)

    @traced("communities.delete_community")
    async def delete_community(
        self, community_id: str, requested_by: str
    ) -> CommunityDeletionOutcome:
        """Delete a community (owner only), then cascade best-effort.

        Cascade order: reactions of its posts, posts, subscriptions. Failed
        steps are listed in pending_compensations.

        Raises:
            ResourceNotFoundException: Community missing.
            AuthorizationException: delete_community_requires_owner.
        """
        cid = str(parse_value(CommunityId, community_id, "community_id"))
        requester = str(parse_value(UserId, requested_by, "requested_by"))
        await self._get_community(cid)
        await self._require_owner(
            cid,
            requester,
            "delete_community",
            RULE_DELETE_COMMUNITY_REQUIRES_OWNER,
            "only the owner can delete the community",
        )

        await self.community_repo.delete(cid)
        logger.info("Community %s deleted by %s", cid, requester)

        pending: list[str] = []
        post_ids: list[str] | None = None
        if self.posts_cleanup is not None:
            try:
                post_ids = await self.posts_cleanup.post_ids_of_community(cid)
            except _PROGRAMMING_ERRORS:
                raise
            except Exception as e:
                logger.warning("Listing posts of deleted community %s failed: %s", cid, e)
        if self.reactions_cleanup is not None:
            if post_ids is None:
                pending.append(CASCADE_REACTIONS)
            elif post_ids and not await self._cascade_step(
                CASCADE_REACTIONS, cid, self.reactions_cleanup.delete_for_posts(post_ids)
            ):
                pending.append(CASCADE_REACTIONS)
        if self.posts_cleanup is not None and not await self._cascade_step(
            CASCADE_POSTS, cid, self.posts_cleanup.delete_all_for_community(cid)
        ):
            pending.append(CASCADE_POSTS)
        if not await self._cascade_step(
            CASCADE_SUBSCRIPTIONS, cid, self.provisioning.revoke_all_for_community(cid)
        ):
            pending.append(CASCADE_SUBSCRIPTIONS)
        return CommunityDeletionOutcome(community_id=cid, pending_compensations=tuple(pending))

    async def _cascade_step(
        self, step: str, community_id: str, awaitable: Awaitable[int]
    ) -> bool:
        """Await one cascade step; return False (logged) when it fails."""
        try:
            deleted = await awaitable
        except _PROGRAMMING_ERRORS:
            raise
        except Exception as e:
            logger.warning(
                "Cascade step %s for deleted community %s failed: %s",
                step,
                community_id,
                e,
                exc_info=True,
            )
            return False
        logger.debug(
            "Cascade step %s removed %s rows for community %s", step, deleted, community_id
        )
        return True


class CommunityQueryService:
    """Read-only community queries."""

    def __init__(self, community_repo: ICommunityRepository) -> None:
        self.community_repo = community_repo

    async def get_by_id(self, community_id: str) -> CommunityResult:
        cid = str(parse_value(CommunityId, community_id, "community_id"))
        community = await self.community_repo.get_by_id(cid)
        if community is None:
            raise ResourceNotFoundException("community", cid)
        return CommunityResult.from_entity(community)

    async def list_all(self, limit: int = 100, offset: int = 0) -> list[CommunityResult]:
        communities = await self.community_repo.list_all(skip=offset, limit=limit)
        return [CommunityResult.from_entity(c) for c in communities]

    async def list_by_owner(self, owner_id: str) -> list[CommunityResult]:
        """Communities recorded under owner_id exactly (no identity reconciliation)."""
        oid = str(parse_value(UserId, owner_id, "owner_id"))
        communities = await self.community_repo.list_by_owner(oid)
        return [CommunityResult.from_entity(c) for c in communities]

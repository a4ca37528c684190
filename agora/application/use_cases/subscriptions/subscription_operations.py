"""Subscription operations: the subscription authorization engine and its queries."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from agora.application.dtos.common import parse_value
from agora.application.dtos.subscription import (
    SubscribeCommand,
    SubscriptionResult,
    UnsubscribeCommand,
)
from agora.application.services.decision_log import NullDecisionLog
from agora.application.services.identity_reconciliation import (
    call_facade,
    resolve_ownership_with_identity_fallback,
)
from agora.application.services.policy import GateRecorder
from agora.application.services.subscription_authorization import (
    RULE_ALREADY_SUBSCRIBED,
    RULE_ROLE_UPDATE_UNSUPPORTED,
    RequesterPrivilege,
    SubscribeFacts,
    UnsubscribeFacts,
    evaluate_owner_grant,
    evaluate_subscribe,
    evaluate_unsubscribe,
    resolve_granted_role,
)
from agora.domain.entities import SubscriptionEntity
from agora.domain.enums import CommunityRole
from agora.domain.exceptions import (
    ResourceNotFoundException,
    SubscriptionConflictException,
    UnsupportedOperationException,
    ValidationException,
)
from agora.domain.value_objects import CommunityId, SubscriptionId, UserId
from agora.shared.telemetry.logging import get_logger
from agora.shared.telemetry.tracing import add_span_attributes, traced
from agora.shared.utils.generators import generate_document_id

if TYPE_CHECKING:
    from agora.application.interfaces.facades import ICommunitiesFacade, IUsersFacade
    from agora.application.interfaces.repositories import ISubscriptionRepository
    from agora.application.interfaces.services import IDecisionLog

logger = get_logger(__name__)


class SubscriptionCommandService:
    """Subscribe and unsubscribe under the community privacy and privilege rules.

    Gates run in a fixed order and the first failure raises; nothing is
    written before the final save. Also implements ISubscriptionProvisioning
    for the communities module (owner grant and cascade revoke).
    """

    def __init__(
        self,
        subscription_repo: ISubscriptionRepository,
        communities: ICommunitiesFacade,
        users: IUsersFacade,
        decision_log: IDecisionLog | None = None,
    ) -> None:
        self.subscription_repo = subscription_repo
        self.communities = communities
        self.users = users
        self.decision_log = decision_log or NullDecisionLog()

    async def _require_community(self, community_id: str, gates: GateRecorder) -> None:
        if not await call_facade(
            self.communities.exists(community_id), facade="communities", operation="exists"
        ):
            gates.deny("existence", "community_not_found")
            raise ResourceNotFoundException("community", community_id)

    async def _require_user(self, user_id: str, gates: GateRecorder) -> None:
        if not await call_facade(
            self.users.exists(user_id), facade="users", operation="exists"
        ):
            gates.deny("existence", "user_not_found")
            raise ResourceNotFoundException("user", user_id)

    async def _requester_privilege(
        self, requester_id: str, community_id: str
    ) -> RequesterPrivilege:
        """Reconciled ownership plus the requester's own subscription role."""
        ownership = await resolve_ownership_with_identity_fallback(
            self.communities, self.users, community_id, requester_id
        )
        if ownership.is_owner:
            return RequesterPrivilege(is_owner=True)
        subscription = await self.subscription_repo.get(requester_id, community_id)
        return RequesterPrivilege(role=subscription.role if subscription else None)

    @traced("subscriptions.subscribe")
    async def subscribe(
        self,
        requested_by: str,
        target_user_id: str,
        community_id: str,
        role: str | CommunityRole = CommunityRole.MEMBER,
    ) -> SubscriptionId:
        """Subscribe target_user_id to the community on behalf of requested_by.

        Self-subscription always grants member. Delegation is only possible
        in private communities, by the owner or an admin.

        Raises:
            ValidationException: Malformed id or unknown role.
            ResourceNotFoundException: Community, target, or requester missing.
            AuthorizationException: Policy gate rejected the request.
            SubscriptionConflictException: Pair already subscribed.
            FacadeCallException: A facade call failed.
        """
        cmd = SubscribeCommand.create(requested_by, target_user_id, community_id, role)
        cid = str(cmd.community_id)
        target = str(cmd.target_user_id)
        requester = str(cmd.requested_by)
        gates = GateRecorder(
            self.decision_log,
            "subscribe",
            actor_id=requester,
            target_id=target,
            community_id=cid,
        )

        await self._require_community(cid, gates)
        await self._require_user(target, gates)
        await self._require_user(requester, gates)
        if not await call_facade(
            self.users.role_name_valid(cmd.requested_role.value),
            facade="users",
            operation="role_name_valid",
        ):
            gates.deny("role", "role_must_be_valid")
            raise ValidationException(
                f"Invalid role: {cmd.requested_role.value}", field="role"
            )

        is_private = await call_facade(
            self.communities.is_private(cid), facade="communities", operation="is_private"
        )
        facts = SubscribeFacts(
            is_self=cmd.is_self,
            is_private=is_private,
            requested_role=cmd.requested_role,
        )
        if is_private and not cmd.is_self:
            facts = replace(
                facts, requester=await self._requester_privilege(requester, cid)
            )
        gates.enforce("policy", evaluate_subscribe(facts))
        granted_role = resolve_granted_role(cmd.is_self, cmd.requested_role)

        if await self.subscription_repo.get(target, cid) is not None:
            gates.deny("uniqueness", RULE_ALREADY_SUBSCRIBED)
            raise SubscriptionConflictException(target, cid)

        created = await self.subscription_repo.add(
            SubscriptionEntity(
                id=generate_document_id(),
                user_id=target,
                community_id=cid,
                role=granted_role,
            )
        )
        add_span_attributes(granted_role=granted_role.value, is_private=is_private)
        logger.info(
            "User %s subscribed to community %s as %s (requested by %s)",
            target,
            cid,
            granted_role.value,
            requester,
        )
        return SubscriptionId(created.id)

    @traced("subscriptions.unsubscribe")
    async def unsubscribe(
        self, requested_by: str, target_user_id: str, community_id: str
    ) -> None:
        """Remove target_user_id from the community.

        Raises:
            ResourceNotFoundException: Community or subscription missing.
            AuthorizationException: Requester lacks privilege, or target is the owner.
        """
        cmd = UnsubscribeCommand.create(requested_by, target_user_id, community_id)
        cid = str(cmd.community_id)
        target = str(cmd.target_user_id)
        requester = str(cmd.requested_by)
        gates = GateRecorder(
            self.decision_log,
            "unsubscribe",
            actor_id=requester,
            target_id=target,
            community_id=cid,
        )

        await self._require_community(cid, gates)
        if await self.subscription_repo.get(target, cid) is None:
            gates.deny("existence", "subscription_not_found")
            raise ResourceNotFoundException("subscription", f"{target}:{cid}")

        requester_privilege = RequesterPrivilege()
        if not cmd.is_self:
            requester_privilege = await self._requester_privilege(requester, cid)
        target_ownership = await resolve_ownership_with_identity_fallback(
            self.communities, self.users, cid, target
        )
        gates.enforce(
            "policy",
            evaluate_unsubscribe(
                UnsubscribeFacts(
                    is_self=cmd.is_self,
                    target_is_owner=target_ownership.is_owner,
                    requester=requester_privilege,
                )
            ),
        )

        await self.subscription_repo.delete(target, cid)
        logger.info(
            "User %s unsubscribed from community %s (requested by %s)",
            target,
            cid,
            requester,
        )

    @traced("subscriptions.change_role")
    async def change_role(
        self,
        requested_by: str,
        target_user_id: str,
        community_id: str,
        role: str | CommunityRole,
    ) -> None:
        """Always rejected: roles are never changed in place.

        Raises:
            UnsupportedOperationException: Every time; nothing is mutated.
        """
        gates = GateRecorder(
            self.decision_log,
            "change_role",
            actor_id=requested_by,
            target_id=target_user_id,
            community_id=community_id,
        )
        gates.deny("operation", RULE_ROLE_UPDATE_UNSUPPORTED)
        logger.warning(
            "Rejected role update for user %s in community %s requested by %s",
            target_user_id,
            community_id,
            requested_by,
        )
        raise UnsupportedOperationException(
            "change_role",
            "updating a subscription role is not supported",
        )

    @traced("subscriptions.grant_owner_subscription")
    async def grant_owner_subscription(
        self, owner_id: str, community_id: str
    ) -> SubscriptionResult:
        """Create the owner-role subscription for the community owner.

        owner_id must be a registered user id. When the community records its
        owner under the profile id, ownership is confirmed through the
        reconciled check and the row is still keyed by the user id. Idempotent
        when the owner subscription already exists, so callers can retry it.

        Raises:
            ResourceNotFoundException: Community missing, or owner_id is not a user id.
            AuthorizationException: owner_id is not the recorded owner.
            SubscriptionConflictException: owner_id holds a non-owner subscription.
        """
        uid = str(parse_value(UserId, owner_id, "owner_id"))
        cid = str(parse_value(CommunityId, community_id, "community_id"))
        gates = GateRecorder(
            self.decision_log,
            "grant_owner_subscription",
            actor_id=uid,
            target_id=uid,
            community_id=cid,
        )
        await self._require_community(cid, gates)
        await self._require_user(uid, gates)
        ownership = await resolve_ownership_with_identity_fallback(
            self.communities, self.users, cid, uid
        )
        gates.enforce("policy", evaluate_owner_grant(ownership.is_owner))
        add_span_attributes(owner_matched_via=ownership.matched_via or "")

        existing = await self.subscription_repo.get(uid, cid)
        if existing is not None:
            if existing.role is CommunityRole.OWNER:
                return SubscriptionResult.from_entity(existing)
            gates.deny("uniqueness", RULE_ALREADY_SUBSCRIBED)
            raise SubscriptionConflictException(uid, cid)

        created = await self.subscription_repo.add(
            SubscriptionEntity(
                id=generate_document_id(),
                user_id=uid,
                community_id=cid,
                role=CommunityRole.OWNER,
            )
        )
        logger.info("Owner subscription created for user %s in community %s", uid, cid)
        return SubscriptionResult.from_entity(created)

    @traced("subscriptions.revoke_all_for_community")
    async def revoke_all_for_community(self, community_id: str) -> int:
        """Delete every subscription of a community (community deletion cascade)."""
        deleted = await self.subscription_repo.delete_by_community(community_id)
        logger.info("Revoked %d subscriptions of community %s", deleted, community_id)
        return deleted


class SubscriptionQueryService:
    """Read-only subscription queries."""

    def __init__(self, subscription_repo: ISubscriptionRepository) -> None:
        self.subscription_repo = subscription_repo

    async def get(self, user_id: str, community_id: str) -> SubscriptionResult:
        """Return the (user, community) subscription; else raise ResourceNotFoundException."""
        uid = str(parse_value(UserId, user_id, "user_id"))
        cid = str(parse_value(CommunityId, community_id, "community_id"))
        subscription = await self.subscription_repo.get(uid, cid)
        if subscription is None:
            raise ResourceNotFoundException("subscription", f"{uid}:{cid}")
        return SubscriptionResult.from_entity(subscription)

    async def count_by_community(self, community_id: str) -> int:
        cid = str(parse_value(CommunityId, community_id, "community_id"))
        return await self.subscription_repo.count_by_community(cid)

    async def list_by_community(
        self, community_id: str, limit: int = 100, offset: int = 0
    ) -> list[SubscriptionResult]:
        cid = str(parse_value(CommunityId, community_id, "community_id"))
        subscriptions = await self.subscription_repo.list_by_community(
            cid, skip=offset, limit=limit
        )
        return [SubscriptionResult.from_entity(s) for s in subscriptions]

    async def list_by_user(self, user_id: str) -> list[SubscriptionResult]:
        uid = str(parse_value(UserId, user_id, "user_id"))
        subscriptions = await self.subscription_repo.list_by_user(uid)
        return [SubscriptionResult.from_entity(s) for s in subscriptions]

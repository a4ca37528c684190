"""DTOs for subscription use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from agora.application.dtos.common import parse_value
from agora.domain.entities import SubscriptionEntity
from agora.domain.enums import CommunityRole
from agora.domain.value_objects import CommunityId, UserId


@dataclass(frozen=True)
class SubscribeCommand:
    """Validated input for Subscribe. Build with create() from raw strings."""

    requested_by: UserId
    target_user_id: UserId
    community_id: CommunityId
    requested_role: CommunityRole

    @classmethod
    def create(
        cls,
        requested_by: str,
        target_user_id: str,
        community_id: str,
        role: str | CommunityRole = CommunityRole.MEMBER,
    ) -> "SubscribeCommand":
        """Parse ids and role. Raises ValidationException on malformed input."""
        return cls(
            requested_by=parse_value(UserId, requested_by, "requested_by"),
            target_user_id=parse_value(UserId, target_user_id, "target_user_id"),
            community_id=parse_value(CommunityId, community_id, "community_id"),
            requested_role=(
                role
                if isinstance(role, CommunityRole)
                else CommunityRole.parse(role, field="role")
            ),
        )

    @property
    def is_self(self) -> bool:
        return self.target_user_id == self.requested_by


@dataclass(frozen=True)
class UnsubscribeCommand:
    """Validated input for Unsubscribe."""

    requested_by: UserId
    target_user_id: UserId
    community_id: CommunityId

    @classmethod
    def create(
        cls, requested_by: str, target_user_id: str, community_id: str
    ) -> "UnsubscribeCommand":
        return cls(
            requested_by=parse_value(UserId, requested_by, "requested_by"),
            target_user_id=parse_value(UserId, target_user_id, "target_user_id"),
            community_id=parse_value(CommunityId, community_id, "community_id"),
        )

    @property
    def is_self(self) -> bool:
        return self.target_user_id == self.requested_by


@dataclass(frozen=True)
class SubscriptionResult:
    """Subscription read-model (result of get, list_by_community, grant_owner_subscription)."""

    id: str
    user_id: str
    community_id: str
    role: CommunityRole
    created_at: datetime

    @classmethod
    def from_entity(cls, entity: SubscriptionEntity) -> "SubscriptionResult":
        return cls(
            id=entity.id,
            user_id=entity.user_id,
            community_id=entity.community_id,
            role=entity.role,
            created_at=entity.created_at,
        )

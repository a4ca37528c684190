"""DTOs for community use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime

from agora.application.dtos.common import parse_optional, parse_value
from agora.domain.entities import CommunityEntity
from agora.domain.enums import Privacy
from agora.domain.value_objects import (
    CommunityName,
    Description,
    ImageUrl,
    UserId,
)


@dataclass(frozen=True)
class CreateCommunityCommand:
    """Validated input for community creation."""

    owner_id: UserId
    name: CommunityName
    description: Description
    privacy: Privacy
    icon_url: ImageUrl | None = None
    banner_url: ImageUrl | None = None

    @classmethod
    def create(
        cls,
        owner_id: str,
        name: str,
        description: str,
        is_private: bool = False,
        icon_url: str | None = None,
        banner_url: str | None = None,
    ) -> "CreateCommunityCommand":
        return cls(
            owner_id=parse_value(UserId, owner_id, "owner_id"),
            name=parse_value(CommunityName, name, "name"),
            description=parse_value(Description, description, "description"),
            privacy=Privacy.from_flag(is_private),
            icon_url=parse_optional(ImageUrl, icon_url, "icon_url"),
            banner_url=parse_optional(ImageUrl, banner_url, "banner_url"),
        )


@dataclass(frozen=True)
class CommunityResult:
    """Community read-model."""

    id: str
    owner_id: str
    name: str
    description: str
    is_private: bool
    icon_url: str | None
    banner_url: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, entity: CommunityEntity) -> "CommunityResult":
        return cls(
            id=entity.id,
            owner_id=entity.owner_id,
            name=entity.name.value,
            description=entity.description.value,
            is_private=entity.is_private,
            icon_url=entity.icon_url.value if entity.icon_url else None,
            banner_url=entity.banner_url.value if entity.banner_url else None,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


@dataclass(frozen=True)
class CommunityCreationOutcome:
    """Result of community creation.

    committed is True whenever the community was stored. The owner
    subscription is created in a second, non-transactional step; when it
    fails compensation_pending is True and compensation_error says why.
    Call retry_owner_subscription(community.id, owner_user_id) to re-run it.
    """

    community: CommunityResult
    committed: bool = True
    compensation_pending: bool = False
    compensation_error: str | None = None


@dataclass(frozen=True)
class CommunityDeletionOutcome:
    """Result of community deletion. pending_compensations names cascade steps that failed."""

    community_id: str
    pending_compensations: tuple[str, ...] = field(default_factory=tuple)

    @property
    def compensation_pending(self) -> bool:
        return bool(self.pending_compensations)

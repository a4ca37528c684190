"""Subscription domain entity.

A subscription is the (user, community, role) triple. At most one exists per
(user, community) pair; roles are never changed in place.
"""

from dataclasses import dataclass, field
from datetime import datetime

from agora.domain.enums import CommunityRole
from agora.domain.exceptions import ValidationException
from agora.shared.utils.datetime import utc_now


@dataclass
class SubscriptionEntity:
    """Domain entity for a user's membership in one community."""

    id: str
    user_id: str
    community_id: str
    role: CommunityRole
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raises ValidationException if a reference is missing."""
        if not self.id:
            raise ValidationException("Subscription ID is required", field="id")
        if not self.user_id:
            raise ValidationException("User ID is required", field="user_id")
        if not self.community_id:
            raise ValidationException("Community ID is required", field="community_id")

    def is_admin_or_owner(self) -> bool:
        return self.role.is_admin_or_owner

"""Community domain entity.

owner_id is stored as a string because existing communities record their
owner under either identity representation (user id or profile id).
"""

from dataclasses import dataclass, field
from datetime import datetime

from agora.domain.enums import Privacy
from agora.domain.exceptions import ValidationException
from agora.domain.value_objects.core import CommunityName, Description, ImageUrl
from agora.shared.utils.datetime import utc_now


@dataclass
class CommunityEntity:
    """Domain entity for a community and its owner-editable settings."""

    id: str
    owner_id: str
    name: CommunityName
    description: Description
    privacy: Privacy = Privacy.PUBLIC
    icon_url: ImageUrl | None = None
    banner_url: ImageUrl | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate community invariants. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException("Community ID is required", field="id")
        if not self.owner_id:
            raise ValidationException("Owner ID is required", field="owner_id")

    @property
    def is_private(self) -> bool:
        return self.privacy.is_private

    def is_owner(self, candidate_id: str) -> bool:
        """Return whether candidate_id is the recorded owner (exact match only)."""
        return bool(candidate_id) and candidate_id == self.owner_id

    def update_info(
        self,
        name: CommunityName | None = None,
        description: Description | None = None,
        icon_url: ImageUrl | None = None,
        banner_url: ImageUrl | None = None,
    ) -> None:
        """Apply the given fields; None leaves a field unchanged."""
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if icon_url is not None:
            self.icon_url = icon_url
        if banner_url is not None:
            self.banner_url = banner_url
        self.updated_at = utc_now()

    def update_privacy(self, privacy: Privacy) -> None:
        """Switch privacy. Existing subscriptions are unaffected."""
        self.privacy = privacy
        self.updated_at = utc_now()

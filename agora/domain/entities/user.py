"""User domain entity.

Each user has two identities: user_id (token subject) and profile_id
(module-derived). Both are immutable once registered.
"""

from dataclasses import dataclass, field
from datetime import datetime

from agora.domain.exceptions import ValidationException
from agora.domain.value_objects.core import ImageUrl, Username
from agora.shared.utils.datetime import utc_now


@dataclass
class UserEntity:
    """Domain entity for a registered user and their public profile."""

    user_id: str
    profile_id: str
    username: Username
    profile_picture_url: ImageUrl | None = None
    banner_url: ImageUrl | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raises ValidationException if either identity is missing."""
        if not self.user_id:
            raise ValidationException("User ID is required", field="user_id")
        if not self.profile_id:
            raise ValidationException("Profile ID is required", field="profile_id")

    def has_identity(self, candidate_id: str) -> bool:
        """Return whether candidate_id is either of this user's identities."""
        return candidate_id in (self.user_id, self.profile_id)

    def update_profile(
        self,
        username: Username | None = None,
        profile_picture_url: ImageUrl | None = None,
        banner_url: ImageUrl | None = None,
    ) -> None:
        """Apply the given profile fields; None leaves a field unchanged."""
        if username is not None:
            self.username = username
        if profile_picture_url is not None:
            self.profile_picture_url = profile_picture_url
        if banner_url is not None:
            self.banner_url = banner_url
        self.updated_at = utc_now()

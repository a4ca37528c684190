"""DTOs for user use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from agora.application.dtos.common import parse_optional, parse_value
from agora.domain.entities import UserEntity
from agora.domain.value_objects import ImageUrl, ProfileId, UserId, Username


@dataclass(frozen=True)
class RegisterUserCommand:
    """Validated input for registering a user (both identities are issued upstream)."""

    user_id: UserId
    profile_id: ProfileId
    username: Username
    profile_picture_url: ImageUrl | None = None

    @classmethod
    def create(
        cls,
        user_id: str,
        profile_id: str,
        username: str,
        profile_picture_url: str | None = None,
    ) -> "RegisterUserCommand":
        return cls(
            user_id=parse_value(UserId, user_id, "user_id"),
            profile_id=parse_value(ProfileId, profile_id, "profile_id"),
            username=parse_value(Username, username, "username"),
            profile_picture_url=parse_optional(
                ImageUrl, profile_picture_url, "profile_picture_url"
            ),
        )


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of get_by_user_id, register_user, etc.)."""

    user_id: str
    profile_id: str
    username: str
    profile_picture_url: str | None
    banner_url: str | None
    created_at: datetime

    @classmethod
    def from_entity(cls, entity: UserEntity) -> "UserResult":
        return cls(
            user_id=entity.user_id,
            profile_id=entity.profile_id,
            username=entity.username.value,
            profile_picture_url=(
                entity.profile_picture_url.value if entity.profile_picture_url else None
            ),
            banner_url=entity.banner_url.value if entity.banner_url else None,
            created_at=entity.created_at,
        )

"""User operations: registration (idempotent) and profile updates."""

from __future__ import annotations

from typing import TYPE_CHECKING

from agora.application.dtos.common import parse_optional, parse_value
from agora.application.dtos.user import RegisterUserCommand, UserResult
from agora.domain.entities import UserEntity
from agora.domain.exceptions import ResourceNotFoundException, ValidationException
from agora.domain.value_objects import ImageUrl, UserId, Username
from agora.shared.telemetry.logging import get_logger
from agora.shared.telemetry.tracing import traced

if TYPE_CHECKING:
    from agora.application.interfaces.repositories import IUserRepository

logger = get_logger(__name__)


class UserCommandService:
    """Register users and update their profiles."""

    def __init__(self, user_repo: IUserRepository) -> None:
        self.user_repo = user_repo

    @traced("users.register_user")
    async def register_user(
        self,
        user_id: str,
        profile_id: str,
        username: str,
        profile_picture_url: str | None = None,
    ) -> UserResult:
        """Register a user issued by the identity provider.

        Re-delivering the same registration returns the existing user
        unchanged.

        Raises:
            ValidationException: Malformed input or username taken by another user.
        """
        cmd = RegisterUserCommand.create(user_id, profile_id, username, profile_picture_url)
        existing = await self.user_repo.get_by_user_id(str(cmd.user_id))
        if existing is not None:
            logger.info("User %s already registered", existing.user_id)
            return UserResult.from_entity(existing)

        taken = await self.user_repo.get_by_username(cmd.username.value)
        if taken is not None:
            raise ValidationException("Username is already taken", field="username")

        user = await self.user_repo.add(
            UserEntity(
                user_id=str(cmd.user_id),
                profile_id=str(cmd.profile_id),
                username=cmd.username,
                profile_picture_url=cmd.profile_picture_url,
            )
        )
        logger.info("Registered user %s (%s)", user.user_id, user.username.value)
        return UserResult.from_entity(user)

    @traced("users.update_profile")
    async def update_profile(
        self,
        user_id: str,
        username: str | None = None,
        profile_picture_url: str | None = None,
        banner_url: str | None = None,
    ) -> UserResult:
        """Update profile fields; None leaves a field unchanged."""
        uid = str(parse_value(UserId, user_id, "user_id"))
        new_username = parse_optional(Username, username, "username")
        user = await self.user_repo.get_by_user_id(uid)
        if user is None:
            raise ResourceNotFoundException("user", uid)
        if new_username is not None and new_username != user.username:
            taken = await self.user_repo.get_by_username(new_username.value)
            if taken is not None and taken.user_id != uid:
                raise ValidationException("Username is already taken", field="username")
        user.update_profile(
            username=new_username,
            profile_picture_url=parse_optional(
                ImageUrl, profile_picture_url, "profile_picture_url"
            ),
            banner_url=parse_optional(ImageUrl, banner_url, "banner_url"),
        )
        return UserResult.from_entity(await self.user_repo.update(user))


class UserQueryService:
    """Read-only user queries."""

    def __init__(self, user_repo: IUserRepository) -> None:
        self.user_repo = user_repo

    async def get_by_user_id(self, user_id: str) -> UserResult:
        uid = str(parse_value(UserId, user_id, "user_id"))
        user = await self.user_repo.get_by_user_id(uid)
        if user is None:
            raise ResourceNotFoundException("user", uid)
        return UserResult.from_entity(user)

    async def get_by_username(self, username: str) -> UserResult:
        user = await self.user_repo.get_by_username(username)
        if user is None:
            raise ResourceNotFoundException("user", username)
        return UserResult.from_entity(user)

"""User repository (SQLAlchemy). Returns domain entities."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.entities import UserEntity
from agora.domain.exceptions import ResourceNotFoundException, ValidationException
from agora.domain.value_objects import ImageUrl, Username
from agora.infrastructure.persistence.models.user import AppUser
from agora.shared.utils.datetime import ensure_utc


def _user_to_entity(u: AppUser) -> UserEntity:
    """Map ORM AppUser to UserEntity."""
    return UserEntity(
        user_id=u.user_id,
        profile_id=u.profile_id,
        username=Username(u.username),
        profile_picture_url=ImageUrl(u.profile_picture_url) if u.profile_picture_url else None,
        banner_url=ImageUrl(u.banner_url) if u.banner_url else None,
        created_at=ensure_utc(u.created_at),
        updated_at=ensure_utc(u.updated_at),
    )


class UserRepository:
    """IUserRepository over the app_user table (primary key is user_id)."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _get_row(self, user_id: str) -> AppUser | None:
        result = await self.db.execute(select(AppUser).where(AppUser.user_id == user_id))
        return result.scalar_one_or_none()

    async def get_by_user_id(self, user_id: str) -> UserEntity | None:
        row = await self._get_row(user_id)
        return _user_to_entity(row) if row else None

    async def get_by_username(self, username: str) -> UserEntity | None:
        result = await self.db.execute(select(AppUser).where(AppUser.username == username))
        row = result.scalar_one_or_none()
        return _user_to_entity(row) if row else None

    async def add(self, user: UserEntity) -> UserEntity:
        """Insert user. Raises ValidationException on a duplicate identity or username."""
        row = AppUser(
            user_id=user.user_id,
            profile_id=user.profile_id,
            username=user.username.value,
            profile_picture_url=(
                user.profile_picture_url.value if user.profile_picture_url else None
            ),
            banner_url=user.banner_url.value if user.banner_url else None,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        try:
            self.db.add(row)
            await self.db.flush()
            await self.db.refresh(row)
        except IntegrityError:
            raise ValidationException(
                "User identity or username already registered", field="username"
            ) from None
        return _user_to_entity(row)

    async def update(self, user: UserEntity) -> UserEntity:
        row = await self._get_row(user.user_id)
        if row is None:
            raise ResourceNotFoundException("user", user.user_id)
        row.username = user.username.value
        row.profile_picture_url = (
            user.profile_picture_url.value if user.profile_picture_url else None
        )
        row.banner_url = user.banner_url.value if user.banner_url else None
        try:
            await self.db.flush()
        except IntegrityError:
            raise ValidationException("Username is already taken", field="username") from None
        await self.db.refresh(row)
        return _user_to_entity(row)

"""Users facade over the users repository."""

from __future__ import annotations

from typing import TYPE_CHECKING

from agora.application.dtos.common import parse_value
from agora.domain.enums import CommunityRole
from agora.domain.value_objects import UserId

if TYPE_CHECKING:
    from agora.application.interfaces.repositories import IUserRepository


class UsersFacade:
    """IUsersFacade backed by the module's own repository."""

    def __init__(self, user_repo: IUserRepository) -> None:
        self._repo = user_repo

    async def exists(self, user_id: str) -> bool:
        uid = str(parse_value(UserId, user_id, "user_id"))
        return await self._repo.get_by_user_id(uid) is not None

    async def profile_id_of(self, user_id: str) -> str | None:
        uid = str(parse_value(UserId, user_id, "user_id"))
        user = await self._repo.get_by_user_id(uid)
        return user.profile_id if user else None

    async def role_name_valid(self, name: str) -> bool:
        return (name or "").strip().lower() in CommunityRole.values()

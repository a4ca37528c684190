"""Community repository (SQLAlchemy). Returns domain entities."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.entities import CommunityEntity
from agora.domain.enums import Privacy
from agora.domain.exceptions import ResourceNotFoundException
from agora.domain.value_objects import CommunityName, Description, ImageUrl
from agora.infrastructure.persistence.models.community import Community
from agora.infrastructure.persistence.repositories.base import BaseRepository
from agora.shared.utils.datetime import ensure_utc


def _community_to_entity(c: Community) -> CommunityEntity:
    """Map ORM Community to CommunityEntity."""
    return CommunityEntity(
        id=c.id,
        owner_id=c.owner_id,
        name=CommunityName(c.name),
        description=Description(c.description),
        privacy=Privacy.from_flag(c.is_private),
        icon_url=ImageUrl(c.icon_url) if c.icon_url else None,
        banner_url=ImageUrl(c.banner_url) if c.banner_url else None,
        created_at=ensure_utc(c.created_at),
        updated_at=ensure_utc(c.updated_at),
    )


def _apply(row: Community, entity: CommunityEntity) -> None:
    row.owner_id = entity.owner_id
    row.name = entity.name.value
    row.description = entity.description.value
    row.is_private = entity.is_private
    row.icon_url = entity.icon_url.value if entity.icon_url else None
    row.banner_url = entity.banner_url.value if entity.banner_url else None


class CommunityRepository(BaseRepository[Community]):
    """ICommunityRepository over the community table."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Community)

    async def get_by_id(self, community_id: str) -> CommunityEntity | None:
        row = await self._get_row(community_id)
        return _community_to_entity(row) if row else None

    async def list_all(self, skip: int = 0, limit: int = 100) -> list[CommunityEntity]:
        result = await self.db.execute(
            select(Community)
            .order_by(Community.created_at.desc(), Community.id)
            .offset(skip)
            .limit(limit)
        )
        return [_community_to_entity(c) for c in result.scalars().all()]

    async def list_by_owner(self, owner_id: str) -> list[CommunityEntity]:
        result = await self.db.execute(
            select(Community)
            .where(Community.owner_id == owner_id)
            .order_by(Community.created_at.desc())
        )
        return [_community_to_entity(c) for c in result.scalars().all()]

    async def add(self, community: CommunityEntity) -> CommunityEntity:
        row = Community(
            id=community.id,
            created_at=community.created_at,
            updated_at=community.updated_at,
        )
        _apply(row, community)
        return _community_to_entity(await self._create_row(row))

    async def update(self, community: CommunityEntity) -> CommunityEntity:
        row = await self._get_row(community.id)
        if row is None:
            raise ResourceNotFoundException("community", community.id)
        _apply(row, community)
        return _community_to_entity(await self._update_row(row))

    async def delete(self, community_id: str) -> bool:
        return await self._delete_where(Community.id == community_id) > 0

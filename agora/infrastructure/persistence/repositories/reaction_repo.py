"""Reaction repository (SQLAlchemy). Returns domain entities."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.entities import ReactionEntity
from agora.domain.enums import ReactionType
from agora.domain.exceptions import ResourceNotFoundException, ValidationException
from agora.infrastructure.persistence.models.reaction import Reaction
from agora.infrastructure.persistence.repositories.base import BaseRepository
from agora.shared.utils.datetime import ensure_utc


def _reaction_to_entity(r: Reaction) -> ReactionEntity:
    return ReactionEntity(
        id=r.id,
        post_id=r.post_id,
        user_id=r.user_id,
        type=ReactionType(r.type),
        created_at=ensure_utc(r.created_at),
        updated_at=ensure_utc(r.updated_at),
    )


class ReactionRepository(BaseRepository[Reaction]):
    """IReactionRepository. One row per (post_id, user_id)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Reaction)

    async def get_by_post_and_user(
        self, post_id: str, user_id: str
    ) -> ReactionEntity | None:
        result = await self.db.execute(
            select(Reaction).where(Reaction.post_id == post_id, Reaction.user_id == user_id)
        )
        row = result.scalar_one_or_none()
        return _reaction_to_entity(row) if row else None

    async def add(self, reaction: ReactionEntity) -> ReactionEntity:
        row = Reaction(
            id=reaction.id,
            post_id=reaction.post_id,
            user_id=reaction.user_id,
            type=reaction.type.value,
            created_at=reaction.created_at,
            updated_at=reaction.updated_at,
        )
        try:
            created = await self._create_row(row)
        except IntegrityError:
            raise ValidationException(
                "User already reacted to this post", field="post_id"
            ) from None
        return _reaction_to_entity(created)

    async def update(self, reaction: ReactionEntity) -> ReactionEntity:
        row = await self._get_row(reaction.id)
        if row is None:
            raise ResourceNotFoundException("reaction", reaction.id)
        row.type = reaction.type.value
        return _reaction_to_entity(await self._update_row(row))

    async def delete(self, reaction_id: str) -> bool:
        return await self._delete_where(Reaction.id == reaction_id) > 0

    async def list_by_post(self, post_id: str) -> list[ReactionEntity]:
        result = await self.db.execute(
            select(Reaction)
            .where(Reaction.post_id == post_id)
            .order_by(Reaction.created_at, Reaction.id)
        )
        return [_reaction_to_entity(r) for r in result.scalars().all()]

    async def delete_by_posts(self, post_ids: list[str]) -> int:
        if not post_ids:
            return 0
        return await self._delete_where(Reaction.post_id.in_(post_ids))

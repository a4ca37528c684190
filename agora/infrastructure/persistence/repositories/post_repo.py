"""Post repository (SQLAlchemy). Returns domain entities."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.entities import PostEntity
from agora.domain.enums import PostKind
from agora.domain.value_objects import PostContent, PostImages
from agora.infrastructure.persistence.models.post import Post
from agora.infrastructure.persistence.repositories.base import BaseRepository
from agora.shared.utils.datetime import ensure_utc


def _post_to_entity(p: Post) -> PostEntity:
    """Map ORM Post to PostEntity."""
    return PostEntity(
        id=p.id,
        community_id=p.community_id,
        author_id=p.author_id,
        content=PostContent(p.content),
        kind=PostKind(p.kind),
        images=PostImages.from_urls(p.images),
        created_at=ensure_utc(p.created_at),
        updated_at=ensure_utc(p.updated_at),
    )


class PostRepository(BaseRepository[Post]):
    """IPostRepository over the post table."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Post)

    async def get_by_id(self, post_id: str) -> PostEntity | None:
        row = await self._get_row(post_id)
        return _post_to_entity(row) if row else None

    async def add(self, post: PostEntity) -> PostEntity:
        row = Post(
            id=post.id,
            community_id=post.community_id,
            author_id=post.author_id,
            content=post.content.value,
            kind=post.kind.value,
            images=post.images.urls(),
            created_at=post.created_at,
            updated_at=post.updated_at,
        )
        return _post_to_entity(await self._create_row(row))

    async def delete(self, post_id: str) -> bool:
        return await self._delete_where(Post.id == post_id) > 0

    async def list_by_community(
        self, community_id: str, skip: int = 0, limit: int = 100
    ) -> list[PostEntity]:
        return await self.list_by_communities([community_id], skip=skip, limit=limit)

    async def list_by_communities(
        self,
        community_ids: list[str],
        kind: PostKind | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[PostEntity]:
        if not community_ids:
            return []
        stmt = select(Post).where(Post.community_id.in_(community_ids))
        if kind is not None:
            stmt = stmt.where(Post.kind == kind.value)
        result = await self.db.execute(
            stmt.order_by(Post.created_at.desc(), Post.id.desc()).offset(skip).limit(limit)
        )
        return [_post_to_entity(p) for p in result.scalars().all()]

    async def ids_by_community(self, community_id: str) -> list[str]:
        result = await self.db.execute(
            select(Post.id).where(Post.community_id == community_id)
        )
        return list(result.scalars().all())

    async def delete_by_community(self, community_id: str) -> int:
        return await self._delete_where(Post.community_id == community_id)

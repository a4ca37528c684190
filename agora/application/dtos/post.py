"""DTOs for post use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from agora.application.dtos.common import parse_value
from agora.domain.entities import PostEntity
from agora.domain.enums import PostKind
from agora.domain.value_objects import (
    CommunityId,
    PostContent,
    PostId,
    PostImages,
    UserId,
)


@dataclass(frozen=True)
class PublishPostCommand:
    """Validated input for PublishPost."""

    author_id: UserId
    community_id: CommunityId
    content: PostContent
    kind: PostKind
    images: PostImages

    @classmethod
    def create(
        cls,
        author_id: str,
        community_id: str,
        content: str,
        kind: str | PostKind = PostKind.MESSAGE,
        images: list[str] | None = None,
    ) -> "PublishPostCommand":
        """Parse raw input. Raises ValidationException on malformed input."""
        return cls(
            author_id=parse_value(UserId, author_id, "author_id"),
            community_id=parse_value(CommunityId, community_id, "community_id"),
            content=parse_value(PostContent, content, "content"),
            kind=kind if isinstance(kind, PostKind) else PostKind.parse(kind, field="kind"),
            images=parse_value(PostImages.from_urls, images, "images"),
        )


@dataclass(frozen=True)
class DeletePostCommand:
    """Validated input for DeletePost."""

    requested_by: UserId
    post_id: PostId

    @classmethod
    def create(cls, requested_by: str, post_id: str) -> "DeletePostCommand":
        return cls(
            requested_by=parse_value(UserId, requested_by, "requested_by"),
            post_id=parse_value(PostId, post_id, "post_id"),
        )


@dataclass(frozen=True)
class PostResult:
    """Post read-model (result of get_by_id, list_by_community, posts_by_communities)."""

    id: str
    community_id: str
    author_id: str
    content: str
    kind: PostKind
    images: list[str]
    created_at: datetime

    @classmethod
    def from_entity(cls, entity: PostEntity) -> "PostResult":
        return cls(
            id=entity.id,
            community_id=entity.community_id,
            author_id=entity.author_id,
            content=entity.content.value,
            kind=entity.kind,
            images=entity.images.urls(),
            created_at=entity.created_at,
        )


@dataclass(frozen=True)
class PostDeletionOutcome:
    """Result of DeletePost.

    The post is always gone when this is returned. Reaction cleanup is a
    separate best-effort step: compensation_pending is True when it failed,
    and the caller decides whether to retry.
    """

    post_id: str
    reactions_deleted: int = 0
    compensation_pending: bool = False
    compensation_error: str | None = None

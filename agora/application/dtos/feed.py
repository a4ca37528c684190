"""DTOs for the user feed."""

from dataclasses import dataclass
from datetime import datetime

from agora.application.dtos.post import PostResult


@dataclass(frozen=True)
class FeedItem:
    """One announcement in a user's feed."""

    post_id: str
    community_id: str
    author_id: str
    content: str
    images: list[str]
    created_at: datetime

    @classmethod
    def from_post(cls, post: PostResult) -> "FeedItem":
        return cls(
            post_id=post.id,
            community_id=post.community_id,
            author_id=post.author_id,
            content=post.content,
            images=list(post.images),
            created_at=post.created_at,
        )

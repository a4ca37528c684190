"""Post domain entity."""

from dataclasses import dataclass, field
from datetime import datetime

from agora.domain.enums import PostKind
from agora.domain.exceptions import ValidationException
from agora.domain.value_objects.core import PostContent, PostImages
from agora.shared.utils.datetime import utc_now


@dataclass
class PostEntity:
    """Domain entity for a message or announcement published in a community."""

    id: str
    community_id: str
    author_id: str
    content: PostContent
    kind: PostKind = PostKind.MESSAGE
    images: PostImages = field(default_factory=PostImages)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationException("Post ID is required", field="id")
        if not self.community_id:
            raise ValidationException("Community ID is required", field="community_id")
        if not self.author_id:
            raise ValidationException("Author ID is required", field="author_id")

    @property
    def is_announcement(self) -> bool:
        return self.kind is PostKind.ANNOUNCEMENT

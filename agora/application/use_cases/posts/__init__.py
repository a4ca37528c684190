"""Post use cases."""

from agora.application.use_cases.posts.post_operations import (
    PostCommandService,
    PostQueryService,
)

__all__ = ["PostCommandService", "PostQueryService"]

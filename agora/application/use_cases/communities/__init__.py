"""Community use cases."""

from agora.application.use_cases.communities.community_operations import (
    CommunityCommandService,
    CommunityQueryService,
)

__all__ = ["CommunityCommandService", "CommunityQueryService"]

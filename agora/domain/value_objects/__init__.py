"""Domain value objects and shared value types."""

from agora.domain.value_objects.core import (
    CommunityId,
    CommunityName,
    Description,
    ImageUrl,
    PostContent,
    PostId,
    PostImages,
    ProfileId,
    ReactionId,
    SubscriptionId,
    UserId,
    Username,
)

__all__ = [
    "CommunityId",
    "CommunityName",
    "Description",
    "ImageUrl",
    "PostContent",
    "PostId",
    "PostImages",
    "ProfileId",
    "ReactionId",
    "SubscriptionId",
    "UserId",
    "Username",
]

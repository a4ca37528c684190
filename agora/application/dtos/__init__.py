"""Application DTOs: validated commands and read-models (no ORM dependency)."""

from agora.application.dtos.community import (
    CommunityCreationOutcome,
    CommunityDeletionOutcome,
    CommunityResult,
    CreateCommunityCommand,
)
from agora.application.dtos.feed import FeedItem
from agora.application.dtos.post import (
    DeletePostCommand,
    PostDeletionOutcome,
    PostResult,
    PublishPostCommand,
)
from agora.application.dtos.reaction import ReactionResult, ReactionSummary
from agora.application.dtos.subscription import (
    SubscribeCommand,
    SubscriptionResult,
    UnsubscribeCommand,
)
from agora.application.dtos.user import RegisterUserCommand, UserResult

__all__ = [
    "CommunityCreationOutcome",
    "CommunityDeletionOutcome",
    "CommunityResult",
    "CreateCommunityCommand",
    "DeletePostCommand",
    "FeedItem",
    "PostDeletionOutcome",
    "PostResult",
    "PublishPostCommand",
    "ReactionResult",
    "ReactionSummary",
    "RegisterUserCommand",
    "SubscribeCommand",
    "SubscriptionResult",
    "UnsubscribeCommand",
    "UserResult",
]

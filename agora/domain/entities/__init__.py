"""Domain entities (business logic independent of persistence)."""

from agora.domain.entities.community import CommunityEntity
from agora.domain.entities.post import PostEntity
from agora.domain.entities.reaction import ReactionEntity
from agora.domain.entities.subscription import SubscriptionEntity
from agora.domain.entities.user import UserEntity

__all__ = [
    "CommunityEntity",
    "PostEntity",
    "ReactionEntity",
    "SubscriptionEntity",
    "UserEntity",
]

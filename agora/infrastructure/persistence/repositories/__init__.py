"""SQLAlchemy repositories implementing the application repository ports."""

from agora.infrastructure.persistence.repositories.community_repo import (
    CommunityRepository,
)
from agora.infrastructure.persistence.repositories.post_repo import PostRepository
from agora.infrastructure.persistence.repositories.reaction_repo import (
    ReactionRepository,
)
from agora.infrastructure.persistence.repositories.subscription_repo import (
    SubscriptionRepository,
)
from agora.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "CommunityRepository",
    "PostRepository",
    "ReactionRepository",
    "SubscriptionRepository",
    "UserRepository",
]

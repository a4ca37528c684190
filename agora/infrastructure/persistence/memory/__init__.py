"""In-memory repositories for the memory backend and tests."""

from agora.infrastructure.persistence.memory.repositories import (
    InMemoryCommunityRepository,
    InMemoryPostRepository,
    InMemoryReactionRepository,
    InMemorySubscriptionRepository,
    InMemoryUserRepository,
)

__all__ = [
    "InMemoryCommunityRepository",
    "InMemoryPostRepository",
    "InMemoryReactionRepository",
    "InMemorySubscriptionRepository",
    "InMemoryUserRepository",
]

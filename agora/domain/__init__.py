"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from agora.domain.entities import (
    CommunityEntity,
    PostEntity,
    ReactionEntity,
    SubscriptionEntity,
    UserEntity,
)
from agora.domain.enums import (
    CommunityRole,
    DecisionOutcome,
    PostKind,
    Privacy,
    ReactionType,
)
from agora.domain.exceptions import (
    AgoraException,
    AuthorizationException,
    FacadeCallException,
    ResourceNotFoundException,
    SubscriptionConflictException,
    UnsupportedOperationException,
    ValidationException,
)

__all__ = [
    # Entities
    "CommunityEntity",
    "PostEntity",
    "ReactionEntity",
    "SubscriptionEntity",
    "UserEntity",
    # Enums
    "CommunityRole",
    "DecisionOutcome",
    "PostKind",
    "Privacy",
    "ReactionType",
    # Exceptions
    "AgoraException",
    "AuthorizationException",
    "FacadeCallException",
    "ResourceNotFoundException",
    "SubscriptionConflictException",
    "UnsupportedOperationException",
    "ValidationException",
]

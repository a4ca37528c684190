"""Application interfaces (ports): repository, facade and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from agora.infrastructure.
"""

from agora.application.interfaces.facades import (
    ICommunitiesFacade,
    IPostsFacade,
    ISubscriptionsFacade,
    IUsersFacade,
)
from agora.application.interfaces.repositories import (
    ICommunityRepository,
    IPostRepository,
    IReactionRepository,
    ISubscriptionRepository,
    IUserRepository,
)
from agora.application.interfaces.services import (
    IDecisionLog,
    IPostsCleanup,
    IReactionsCleanup,
    ISubscriptionProvisioning,
)

__all__ = [
    "ICommunitiesFacade",
    "ICommunityRepository",
    "IDecisionLog",
    "IPostRepository",
    "IPostsCleanup",
    "IPostsFacade",
    "IReactionRepository",
    "IReactionsCleanup",
    "ISubscriptionProvisioning",
    "ISubscriptionRepository",
    "ISubscriptionsFacade",
    "IUserRepository",
    "IUsersFacade",
]

"""Anti-corruption layer: facade implementations each module exposes to the others.

Facades are read-only. Cleanup adapters expose the few writes other modules
issue as compensating actions. Subscription provisioning is implemented by
SubscriptionCommandService itself.
"""

from agora.application.acl.communities import CommunitiesFacade
from agora.application.acl.posts import PostsCleanupAdapter, PostsFacade
from agora.application.acl.reactions import ReactionsCleanupAdapter
from agora.application.acl.subscriptions import SubscriptionsFacade
from agora.application.acl.users import UsersFacade

__all__ = [
    "CommunitiesFacade",
    "PostsCleanupAdapter",
    "PostsFacade",
    "ReactionsCleanupAdapter",
    "SubscriptionsFacade",
    "UsersFacade",
]

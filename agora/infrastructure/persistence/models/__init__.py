"""ORM models. Importing this package registers every table on Base.metadata."""

from agora.infrastructure.persistence.models.community import Community
from agora.infrastructure.persistence.models.post import Post
from agora.infrastructure.persistence.models.reaction import Reaction
from agora.infrastructure.persistence.models.subscription import Subscription
from agora.infrastructure.persistence.models.user import AppUser

__all__ = ["AppUser", "Community", "Post", "Reaction", "Subscription"]

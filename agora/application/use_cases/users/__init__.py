"""User use cases."""

from agora.application.use_cases.users.user_operations import (
    UserCommandService,
    UserQueryService,
)

__all__ = ["UserCommandService", "UserQueryService"]

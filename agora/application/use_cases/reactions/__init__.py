"""Reaction use cases."""

from agora.application.use_cases.reactions.reaction_operations import (
    ReactionCommandService,
    ReactionQueryService,
)

__all__ = ["ReactionCommandService", "ReactionQueryService"]

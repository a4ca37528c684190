"""Reaction cleanup adapter over the reactions repository."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from agora.application.interfaces.repositories import IReactionRepository


class ReactionsCleanupAdapter:
    """IReactionsCleanup used by post and community deletion."""

    def __init__(self, reaction_repo: IReactionRepository) -> None:
        self._repo = reaction_repo

    async def delete_for_posts(self, post_ids: list[str]) -> int:
        if not post_ids:
            return 0
        return await self._repo.delete_by_posts(post_ids)

"""Reaction operations: one reaction per user per post, changed in place."""

from __future__ import annotations

from typing import TYPE_CHECKING

from agora.application.dtos.common import parse_value
from agora.application.dtos.reaction import ReactionResult, ReactionSummary
from agora.application.services.identity_reconciliation import call_facade
from agora.domain.entities import ReactionEntity
from agora.domain.enums import ReactionType
from agora.domain.exceptions import ResourceNotFoundException
from agora.domain.value_objects import PostId, UserId
from agora.shared.telemetry.logging import get_logger
from agora.shared.telemetry.tracing import traced
from agora.shared.utils.generators import generate_document_id

if TYPE_CHECKING:
    from agora.application.interfaces.facades import IPostsFacade, IUsersFacade
    from agora.application.interfaces.repositories import IReactionRepository

logger = get_logger(__name__)


def _parse_ids(post_id: str, user_id: str) -> tuple[str, str]:
    return (
        str(parse_value(PostId, post_id, "post_id")),
        str(parse_value(UserId, user_id, "user_id")),
    )


class ReactionCommandService:
    """Add, change and remove reactions."""

    def __init__(
        self,
        reaction_repo: IReactionRepository,
        posts: IPostsFacade,
        users: IUsersFacade,
    ) -> None:
        self.reaction_repo = reaction_repo
        self.posts = posts
        self.users = users

    @traced("reactions.add_reaction")
    async def add_reaction(
        self, post_id: str, user_id: str, reaction_type: str | ReactionType
    ) -> ReactionResult:
        """Create the user's reaction on the post, or change its type if one exists.

        Raises:
            ValidationException: Malformed id or unknown reaction type.
            ResourceNotFoundException: Post or user missing.
        """
        pid, uid = _parse_ids(post_id, user_id)
        new_type = (
            reaction_type
            if isinstance(reaction_type, ReactionType)
            else ReactionType.parse(reaction_type, field="reaction_type")
        )
        if not await call_facade(self.posts.exists(pid), facade="posts", operation="exists"):
            raise ResourceNotFoundException("post", pid)
        if not await call_facade(self.users.exists(uid), facade="users", operation="exists"):
            raise ResourceNotFoundException("user", uid)

        existing = await self.reaction_repo.get_by_post_and_user(pid, uid)
        if existing is not None:
            if existing.change_type(new_type):
                existing = await self.reaction_repo.update(existing)
                logger.info("Reaction on post %s by %s changed to %s", pid, uid, new_type.value)
            return ReactionResult.from_entity(existing)

        created = await self.reaction_repo.add(
            ReactionEntity(id=generate_document_id(), post_id=pid, user_id=uid, type=new_type)
        )
        logger.info("Reaction %s added on post %s by %s", new_type.value, pid, uid)
        return ReactionResult.from_entity(created)

    @traced("reactions.remove_reaction")
    async def remove_reaction(self, post_id: str, user_id: str) -> None:
        """Remove the user's reaction; raise ResourceNotFoundException when absent."""
        pid, uid = _parse_ids(post_id, user_id)
        existing = await self.reaction_repo.get_by_post_and_user(pid, uid)
        if existing is None:
            raise ResourceNotFoundException("reaction", f"{pid}:{uid}")
        await self.reaction_repo.delete(existing.id)


class ReactionQueryService:
    """Read-only reaction queries."""

    def __init__(self, reaction_repo: IReactionRepository) -> None:
        self.reaction_repo = reaction_repo

    async def list_by_post(self, post_id: str) -> list[ReactionResult]:
        pid = str(parse_value(PostId, post_id, "post_id"))
        return [ReactionResult.from_entity(r) for r in await self.reaction_repo.list_by_post(pid)]

    async def summary_by_post(self, post_id: str) -> ReactionSummary:
        """Total and per-type counts; every ReactionType has an entry."""
        pid = str(parse_value(PostId, post_id, "post_id"))
        counts = {value: 0 for value in ReactionType.values()}
        reactions = await self.reaction_repo.list_by_post(pid)
        for reaction in reactions:
            counts[reaction.type.value] += 1
        return ReactionSummary(post_id=pid, total=len(reactions), counts=counts)

    async def user_reaction_on_post(
        self, post_id: str, user_id: str
    ) -> ReactionResult | None:
        pid, uid = _parse_ids(post_id, user_id)
        reaction = await self.reaction_repo.get_by_post_and_user(pid, uid)
        return ReactionResult.from_entity(reaction) if reaction else None

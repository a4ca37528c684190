"""DTOs for reaction use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from agora.domain.entities import ReactionEntity
from agora.domain.enums import ReactionType


@dataclass(frozen=True)
class ReactionResult:
    """Reaction read-model."""

    id: str
    post_id: str
    user_id: str
    type: ReactionType
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, entity: ReactionEntity) -> "ReactionResult":
        return cls(
            id=entity.id,
            post_id=entity.post_id,
            user_id=entity.user_id,
            type=entity.type,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


@dataclass(frozen=True)
class ReactionSummary:
    """Reaction counts for one post. counts has an entry for every ReactionType."""

    post_id: str
    total: int
    counts: dict[str, int]

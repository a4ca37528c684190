"""Reaction domain entity."""

from dataclasses import dataclass, field
from datetime import datetime

from agora.domain.enums import ReactionType
from agora.domain.exceptions import ValidationException
from agora.shared.utils.datetime import utc_now


@dataclass
class ReactionEntity:
    """One user's reaction on one post. Changing the reaction updates in place."""

    id: str
    post_id: str
    user_id: str
    type: ReactionType
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationException("Reaction ID is required", field="id")
        if not self.post_id or not self.user_id:
            raise ValidationException("Reaction requires post_id and user_id")

    def change_type(self, new_type: ReactionType) -> bool:
        """Set the reaction type. Returns False when it was already new_type."""
        if self.type is new_type:
            return False
        self.type = new_type
        self.updated_at = utc_now()
        return True

"""Domain enumerations for the Agora platform.

Closed sets of domain values. Parsing from free-form strings happens once,
at the boundary, so the rest of the code compares enum members only.
"""

from enum import Enum

from agora.domain.exceptions import ValidationException


class _ValuesMixin:
    """Mixin that adds values() and parse() classmethods to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]

    @classmethod
    def parse(cls, raw: str, field: str | None = None):
        """Return the member for raw (case and surrounding whitespace ignored).

        Raises:
            ValidationException: If raw is empty or not one of values().
        """
        normalized = (raw or "").strip().lower()
        if not normalized:
            raise ValidationException(f"{cls.__name__} cannot be empty", field=field)
        try:
            return cls(normalized)
        except ValueError:
            raise ValidationException(
                f"Invalid {cls.__name__}: must be one of {', '.join(cls.values())}",
                field=field,
            ) from None


class CommunityRole(_ValuesMixin, str, Enum):
    """A user's role inside one community.

    Ordered by privilege: member < admin ~ owner. Admin and owner both
    satisfy admin-or-owner checks; owner additionally cannot be removed.
    """

    MEMBER = "member"
    ADMIN = "admin"
    OWNER = "owner"

    @property
    def is_admin_or_owner(self) -> bool:
        return self in (CommunityRole.ADMIN, CommunityRole.OWNER)

    @property
    def can_publish_messages(self) -> bool:
        return self in (CommunityRole.MEMBER, CommunityRole.ADMIN, CommunityRole.OWNER)


class Privacy(_ValuesMixin, str, Enum):
    """Community privacy. Drives which subscription path is legal."""

    PUBLIC = "public"
    PRIVATE = "private"

    @classmethod
    def from_flag(cls, is_private: bool) -> "Privacy":
        return cls.PRIVATE if is_private else cls.PUBLIC

    @property
    def is_private(self) -> bool:
        return self is Privacy.PRIVATE


class PostKind(_ValuesMixin, str, Enum):
    """Post kind: announcements are restricted to admins and owners."""

    MESSAGE = "message"
    ANNOUNCEMENT = "announcement"

    def permits(self, role: CommunityRole) -> bool:
        """Return whether role may publish a post of this kind."""
        if self is PostKind.ANNOUNCEMENT:
            return role.is_admin_or_owner
        return role.can_publish_messages


class ReactionType(_ValuesMixin, str, Enum):
    """Reaction a user leaves on a post."""

    LIKE = "like"
    LOVE = "love"
    HAHA = "haha"
    WOW = "wow"
    SAD = "sad"
    ANGRY = "angry"


class DecisionOutcome(_ValuesMixin, str, Enum):
    """Result of one authorization gate."""

    ALLOW = "allow"
    DENY = "deny"

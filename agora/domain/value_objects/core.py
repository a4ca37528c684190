"""Domain value objects for the Agora platform.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value. Identifiers come in two
shapes: UUIDs (users, profiles, communities) and 24-hex document ids
(posts, subscriptions, reactions).
"""

import re
import uuid
from dataclasses import dataclass
from urllib.parse import urlparse

_DOCUMENT_ID_RE = re.compile(r"^[0-9a-f]{24}$")
_USERNAME_RE = re.compile(r"^[a-zA-Z0-9_]{3,30}$")


def _validate_uuid(value: str, field_name: str) -> str:
    """Return the canonical form of a UUID string. Raises ValueError on failure."""
    if not value:
        raise ValueError(f"{field_name} cannot be empty")
    try:
        return str(uuid.UUID(value))
    except (ValueError, AttributeError, TypeError):
        raise ValueError(f"{field_name} must be a valid UUID") from None


def _validate_document_id(value: str, field_name: str) -> str:
    """Return a lowercased document id (24 hex chars). Raises ValueError on failure."""
    if not value:
        raise ValueError(f"{field_name} cannot be empty")
    normalized = value.lower()
    if not _DOCUMENT_ID_RE.match(normalized):
        raise ValueError(f"{field_name} must be a valid document id (24 hex characters)")
    return normalized


@dataclass(frozen=True)
class UserId:
    """Primary user identity (the token subject). UUID."""

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _validate_uuid(self.value, "User ID"))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ProfileId:
    """Secondary, module-derived identity of a user. UUID.

    Some communities record their owner under this representation instead
    of the user id.
    """

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _validate_uuid(self.value, "Profile ID"))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CommunityId:
    """Community identifier. UUID."""

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _validate_uuid(self.value, "Community ID"))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PostId:
    """Post identifier (document id)."""

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _validate_document_id(self.value, "Post ID"))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SubscriptionId:
    """Subscription identifier (document id)."""

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "value", _validate_document_id(self.value, "Subscription ID")
        )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ReactionId:
    """Reaction identifier (document id)."""

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "value", _validate_document_id(self.value, "Reaction ID")
        )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Username:
    """Username: 3-30 characters of letters, digits and underscores."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Username cannot be empty")
        if not _USERNAME_RE.match(self.value):
            raise ValueError(
                "Username must be 3-30 characters and contain only letters, numbers, and underscores"
            )


@dataclass(frozen=True)
class CommunityName:
    """Community display name, 3-100 characters after trimming."""

    value: str

    def __post_init__(self) -> None:
        trimmed = (self.value or "").strip()
        if not trimmed:
            raise ValueError("Community name cannot be empty")
        if len(trimmed) < 3:
            raise ValueError("Community name must be at least 3 characters long")
        if len(trimmed) > 100:
            raise ValueError("Community name cannot exceed 100 characters")
        object.__setattr__(self, "value", trimmed)


@dataclass(frozen=True)
class Description:
    """Community description, 10-500 characters after trimming."""

    value: str

    def __post_init__(self) -> None:
        trimmed = (self.value or "").strip()
        if not trimmed:
            raise ValueError("Description cannot be empty")
        if len(trimmed) < 10:
            raise ValueError("Description must be at least 10 characters long")
        if len(trimmed) > 500:
            raise ValueError("Description cannot exceed 500 characters")
        object.__setattr__(self, "value", trimmed)


@dataclass(frozen=True)
class PostContent:
    """Markdown body of a post. Must be non-blank and contain a line break."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("Post content cannot be empty")
        if "\n" not in self.value and "\r" not in self.value:
            raise ValueError(
                "Post content must include at least one line break for markdown formatting"
            )


@dataclass(frozen=True)
class ImageUrl:
    """Absolute http(s) URL of an image."""

    value: str

    def __post_init__(self) -> None:
        trimmed = (self.value or "").strip()
        if not trimmed:
            raise ValueError("Image URL cannot be empty")
        parsed = urlparse(trimmed)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("Image URL must be an absolute URL")
        if parsed.scheme not in ("http", "https"):
            raise ValueError("Image URL must use http or https scheme")
        object.__setattr__(self, "value", trimmed)


@dataclass(frozen=True)
class PostImages:
    """Images attached to a post, in order, without duplicates."""

    values: tuple[ImageUrl, ...] = ()

    @classmethod
    def from_urls(cls, urls: list[str] | None) -> "PostImages":
        """Build from raw URLs; blanks are skipped and duplicates dropped.

        Raises:
            ValueError: If a non-blank URL is invalid.
        """
        seen: set[str] = set()
        images: list[ImageUrl] = []
        for raw in urls or []:
            if not raw or not raw.strip():
                continue
            image = ImageUrl(raw)
            if image.value in seen:
                continue
            seen.add(image.value)
            images.append(image)
        return cls(tuple(images))

    def urls(self) -> list[str]:
        return [image.value for image in self.values]

    def is_empty(self) -> bool:
        return not self.values

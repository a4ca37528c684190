"""Helpers shared by command DTOs."""

from collections.abc import Callable
from typing import TypeVar

from agora.domain.exceptions import ValidationException

V = TypeVar("V")


def parse_value(factory: Callable[[str], V], raw: str, field: str) -> V:
    """Build a value object from raw input, converting ValueError to ValidationException."""
    try:
        return factory(raw)
    except ValueError as e:
        raise ValidationException(str(e), field=field) from None


def parse_optional(
    factory: Callable[[str], V], raw: str | None, field: str
) -> V | None:
    """Like parse_value, but None or blank input yields None."""
    if raw is None or not raw.strip():
        return None
    return parse_value(factory, raw, field)

"""Shared utilities: datetime and id generators."""

from agora.shared.utils.datetime import ensure_utc, utc_now
from agora.shared.utils.generators import generate_document_id, generate_uuid

__all__ = [
    "ensure_utc",
    "generate_document_id",
    "generate_uuid",
    "utc_now",
]

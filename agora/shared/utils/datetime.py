"""UTC helpers. Every timestamp the core stores or compares is timezone-aware UTC."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Normalize a timestamp read from storage.

    Naive values are taken to be UTC already; aware values are converted.
    Feed ordering compares created_at across modules, so rows must not mix
    naive and aware values.
    """
    if dt is None:
        return None
    return dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt.astimezone(UTC)

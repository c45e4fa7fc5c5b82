"""UTC datetime helpers. Every timestamp stored or compared is timezone-aware UTC."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Normalize a datetime read back from storage to aware UTC.

    SQLite returns naive values; those are taken to be UTC already.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)

"""Column default helpers."""

from datetime import datetime, timezone


def utcnow() -> datetime:
    # Python-side defaults keep sub-second ordering on SQLite.
    return datetime.now(timezone.utc)

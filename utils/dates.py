"""
Timestamp normalisation.

The engine compares timestamps coming from different collaborators. Some
may be timezone-aware, others naive. Everything is compared as naive UTC;
naive values are taken to already be UTC.
"""

from datetime import datetime, timezone

__all__ = ["to_utc_naive", "latest"]


def to_utc_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def latest(*values: datetime | None) -> datetime | None:
    """Most recent of the given timestamps, ignoring None."""
    present = [to_utc_naive(v) for v in values if v is not None]
    return max(present) if present else None

"""Moments supplied by callers, normalised so they compare with stored timestamps."""

from datetime import UTC, datetime


def as_utc(moment: datetime | None) -> datetime | None:
    """Treat naive datetimes as UTC. Aware datetimes and None pass through."""
    if moment is not None and moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


def utc_now_or(moment: datetime | None) -> datetime:
    """``moment`` as an aware datetime, or the current time when it is None."""
    return as_utc(moment) or datetime.now(UTC)

"""Datetime helpers.

All timestamps handled by fit-journey are timezone-aware. Naive values
coming from user input or old rows are interpreted as UTC.
"""

from datetime import date, datetime, timezone, tzinfo

SECONDS_PER_HOUR = 60 * 60
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; leave aware ones untouched."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 string into an aware datetime."""
    if not value:
        return None
    return ensure_aware(datetime.fromisoformat(value))


def hours_between(earlier: datetime, later: datetime) -> float:
    return (ensure_aware(later) - ensure_aware(earlier)).total_seconds() / SECONDS_PER_HOUR


def days_between(earlier: datetime, later: datetime) -> float:
    """Fractional days from ``earlier`` to ``later`` (negative if reversed)."""
    return (ensure_aware(later) - ensure_aware(earlier)).total_seconds() / SECONDS_PER_DAY


def calendar_day(value: datetime, tz: tzinfo = timezone.utc) -> date:
    """The calendar date of ``value`` as seen in ``tz``."""
    return ensure_aware(value).astimezone(tz).date()


def format_timestamp(value: datetime | None) -> str | None:
    """Serialize for storage: ISO-8601 in UTC so rows sort chronologically."""
    if value is None:
        return None
    return ensure_aware(value).astimezone(timezone.utc).isoformat()

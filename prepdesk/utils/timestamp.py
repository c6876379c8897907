"""Timestamp and calendar-day utilities."""

from datetime import date, datetime, time, timedelta
from typing import Optional, Union


def now() -> datetime:
    """Current local time (naive)."""
    return datetime.now()


def today() -> datetime:
    """Start of the current local day."""
    return start_of_day(now())


def to_local_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def start_of_day(value: Union[date, datetime]) -> datetime:
    """
    Truncate a date or datetime to local midnight.

    Args:
        value: date, naive datetime, or aware datetime (converted to local time first)

    Returns:
        Naive datetime at 00:00:00
    """
    if isinstance(value, datetime):
        return datetime.combine(to_local_naive(value).date(), time.min)
    return datetime.combine(value, time.min)


def add_days(value: datetime, days: int) -> datetime:
    return value + timedelta(days=days)


def days_between(later: Union[date, datetime], earlier: Union[date, datetime]) -> int:
    """Whole calendar days from earlier to later (negative when later is in the past)."""
    return (start_of_day(later) - start_of_day(earlier)).days


def to_iso(value: Union[date, datetime]) -> str:
    """ISO 8601 string; plain dates are expanded to midnight."""
    if not isinstance(value, datetime):
        value = start_of_day(value)
    return value.isoformat()


def format_timestamp(iso_timestamp: str, relative: bool = False, reference: Optional[datetime] = None) -> str:
    """
    Format ISO 8601 timestamp to readable format.

    Args:
        iso_timestamp: ISO 8601 formatted timestamp string
        relative: If True, show relative days (e.g., "in 3d", "today")
                 If False, show the calendar date (e.g., "Mon 2026-10-19")
        reference: Reference time for relative output (defaults to now)

    Returns:
        Human-readable timestamp

    Examples:
        format_timestamp("2026-10-19T00:00:00")
        # "Mon 2026-10-19"

        format_timestamp("2026-10-22T00:00:00", relative=True)
        # "in 3d"
    """
    try:
        dt = to_local_naive(datetime.fromisoformat(iso_timestamp))

        if relative:
            return _format_relative_days(dt, reference or now())
        else:
            return dt.strftime("%a %Y-%m-%d")

    except (ValueError, AttributeError, TypeError):
        # Return original if parsing fails
        return iso_timestamp


def _format_relative_days(dt: datetime, reference: datetime) -> str:
    """
    Format datetime as relative calendar days in compact format.

    - Same day: "today"
    - Future: "in 3d"
    - Past: "2d ago"
    """
    delta = days_between(dt, reference)

    if delta == 0:
        return "today"
    elif delta > 0:
        return f"in {delta}d"
    else:
        return f"{-delta}d ago"

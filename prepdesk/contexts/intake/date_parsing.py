"""
Relative and loose date parsing for chat-style input.

Every parser returns a naive datetime at local midnight (or None), so results
can be compared and serialized without carrying a time of day.
"""

from datetime import datetime
from typing import Optional

from prepdesk.contexts.intake.patterns import (
    DAYS_OF_WEEK,
    LOOSE_DATE_FORMATS,
    LOOSE_DATE_FORMATS_NO_YEAR,
    DatePatterns,
)
from prepdesk.utils.text_processing import normalize_whitespace
from prepdesk.utils.timestamp import add_days, now, start_of_day

# Fallback horizon when a sprint setup date cannot be understood
DEFAULT_DATE_OFFSET_DAYS = 7


def try_parse_date_input(date_string: str, base_date: Optional[datetime] = None) -> Optional[datetime]:
    """
    Parse a user-provided date expression into a concrete day.

    Supports:
    - ISO strings: `YYYY-MM-DD` or full ISO timestamps
    - Relative strings: `today`, `tomorrow`, `yesterday`
    - Weekdays: `friday`, `next friday` ("next" always skips the current day)
    - `in N days`

    Args:
        date_string: Raw date expression
        base_date: Reference day for relative expressions (defaults to now)

    Returns:
        Start-of-day datetime, or None if the expression is not understood
    """
    raw = date_string.strip()
    base = start_of_day(base_date or now())

    if not raw:
        return None

    if DatePatterns.ISO_LIKE.match(raw):
        try:
            # fromisoformat only accepts a trailing Z from Python 3.11 on
            return start_of_day(datetime.fromisoformat(raw.replace("Z", "+00:00")))
        except ValueError:
            pass

    lowered = raw.lower()

    if lowered == "today":
        return base
    if lowered == "tomorrow":
        return add_days(base, 1)
    if lowered == "yesterday":
        return add_days(base, -1)

    in_days_match = DatePatterns.IN_N_DAYS.search(lowered)
    if in_days_match:
        return add_days(base, int(in_days_match.group(1)))

    has_next = "next " in lowered

    for index, day_name in enumerate(DAYS_OF_WEEK):
        if day_name not in lowered:
            continue

        days_until = index - base.weekday()
        if days_until < 0 or (days_until == 0 and has_next):
            days_until += 7
        return add_days(base, days_until)

    return None


def parse_date_input(date_string: str, base_date: Optional[datetime] = None) -> datetime:
    """
    Parse a date expression, falling back to one week after the base date.

    Sprint setup prefers a reasonable default over a hard error.
    """
    parsed = try_parse_date_input(date_string, base_date)
    if parsed is not None:
        return parsed
    return add_days(start_of_day(base_date or now()), DEFAULT_DATE_OFFSET_DAYS)


def parse_loose_date_expression(value: str, base_date: Optional[datetime] = None) -> Optional[datetime]:
    """
    Parse relative expressions plus common absolute spellings.

    Examples of accepted absolute forms: "Feb 28 2026", "28th feb 2026",
    "02/28/2026", "February 28" (year taken from the base date).

    Args:
        value: Raw date expression
        base_date: Reference day (defaults to now)

    Returns:
        Start-of-day datetime, or None if nothing matched
    """
    trimmed = normalize_whitespace(value)
    if not trimmed:
        return None

    parsed = try_parse_date_input(trimmed, base_date)
    if parsed is not None:
        return parsed

    cleaned = DatePatterns.ORDINAL_SUFFIX.sub(r"\1", trimmed).replace(",", " ")
    cleaned = normalize_whitespace(cleaned)

    for fmt in LOOSE_DATE_FORMATS:
        try:
            return start_of_day(datetime.strptime(cleaned, fmt))
        except ValueError:
            continue

    year = (base_date or now()).year
    for fmt in LOOSE_DATE_FORMATS_NO_YEAR:
        try:
            return start_of_day(datetime.strptime(f"{cleaned} {year}", f"{fmt} %Y"))
        except ValueError:
            continue

    return None

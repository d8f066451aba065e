# slashnote/core/dates/parser.py
"""Natural-language due date parser.

Parses English date expressions into calendar dates for the /due command.
"Today" is taken in the configured timezone.
"""

import calendar
import re
from collections.abc import Callable
from datetime import date, datetime, timedelta

# Signature executors use to parse a date argument
DateParser = Callable[[str], date | None]

# Unit mappings (unit -> (days, months))
DATE_UNITS = {
    "day": (1, 0),
    "days": (1, 0),
    "d": (1, 0),
    "week": (7, 0),
    "weeks": (7, 0),
    "w": (7, 0),
    "month": (0, 1),
    "months": (0, 1),
    "year": (0, 12),
    "years": (0, 12),
}

_UNIT_GROUP = r"(days?|d|weeks?|w|months?|years?)"

# Relative patterns: "in 2 days", "after 1 week", "3 days from now"
RELATIVE_PATTERNS = [
    rf"in\s+(\d+)\s*{_UNIT_GROUP}",
    rf"after\s+(\d+)\s*{_UNIT_GROUP}",
    rf"(\d+)\s*{_UNIT_GROUP}\s+from\s+(?:now|today)",
]

# Day offset words
DAY_PATTERNS = {
    "today": 0,
    "tonight": 0,
    "tomorrow": 1,
    "day after tomorrow": 2,
    "the day after tomorrow": 2,
    "yesterday": -1,
}

WEEKDAYS = {
    "monday": 0,
    "mon": 0,
    "tuesday": 1,
    "tue": 1,
    "tues": 1,
    "wednesday": 2,
    "wed": 2,
    "thursday": 3,
    "thu": 3,
    "thur": 3,
    "thurs": 3,
    "friday": 4,
    "fri": 4,
    "saturday": 5,
    "sat": 5,
    "sunday": 6,
    "sun": 6,
}

MONTHS = {
    name.lower(): index
    for index, name in enumerate(calendar.month_name)
    if name
} | {
    abbr.lower(): index
    for index, abbr in enumerate(calendar.month_abbr)
    if abbr
} | {"sept": 9}

_WEEKDAY_GROUP = "(" + "|".join(sorted(WEEKDAYS, key=len, reverse=True)) + ")"
_MONTH_GROUP = "(" + "|".join(sorted(MONTHS, key=len, reverse=True)) + r")\.?"
_DAY_GROUP = r"(\d{1,2})(?:st|nd|rd|th)?"

# Absolute patterns
ISO_PATTERN = r"(\d{4})-(\d{1,2})-(\d{1,2})"
SLASH_PATTERN = r"(\d{1,2})/(\d{1,2})(?:/(\d{2,4}))?"
MONTH_DAY_PATTERN = rf"{_MONTH_GROUP}\s+{_DAY_GROUP}(?:,?\s+(\d{{4}}))?"
DAY_MONTH_PATTERN = rf"{_DAY_GROUP}\s+(?:of\s+)?{_MONTH_GROUP}(?:,?\s+(\d{{4}}))?"

# Filler words in front of an expression: "on Friday", "by tomorrow"
_PREFIX = re.compile(r"^(?:on|by|due|until|before)\s+")


def _normalize(text: str) -> str:
    """Lowercase, collapse whitespace and drop trailing punctuation."""
    normalized = " ".join(text.lower().split()).rstrip(".!")
    return _PREFIX.sub("", normalized)


def _add_months(base: date, months: int) -> date:
    """Add months to a date, clamping the day to the target month's length."""
    month_index = base.month - 1 + months
    year = base.year + month_index // 12
    month = month_index % 12 + 1
    day = min(base.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _safe_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _upcoming(base: date, month: int, day: int, year: int | None) -> date | None:
    """Build a date; without a year, pick the next occurrence on or after base.

    February 29th without a year can be up to eight years away.
    """
    if year is not None:
        return _safe_date(year, month, day)

    for candidate_year in range(base.year, base.year + 9):
        target = _safe_date(candidate_year, month, day)
        if target is not None and target >= base:
            return target
    return None


def _parse_relative_date(text: str, today: date) -> date | None:
    """Parse relative expressions like "in 2 days" or "next week".

    Args:
        text: Normalized expression.
        today: Reference date.

    Returns:
        Calculated date or None if not matched.
    """
    if text in DAY_PATTERNS:
        return today + timedelta(days=DAY_PATTERNS[text])

    for pattern in RELATIVE_PATTERNS:
        match = re.fullmatch(pattern, text)
        if match:
            amount = int(match.group(1))
            days, months = DATE_UNITS[match.group(2)]
            try:
                result = today + timedelta(days=days * amount)
                return _add_months(result, months * amount) if months else result
            except (OverflowError, ValueError):
                # Past the last representable date
                return None

    if text == "next week":
        return today + timedelta(days=7)
    if text == "next month":
        return _add_months(today, 1)
    if text == "next year":
        return _add_months(today, 12)
    if text in ("end of month", "end of the month"):
        return date(today.year, today.month, calendar.monthrange(today.year, today.month)[1])
    if text in ("end of week", "end of the week"):
        return today + timedelta(days=(WEEKDAYS["friday"] - today.weekday()) % 7)

    # Weekdays: "friday", "this friday", "next friday"
    match = re.fullmatch(rf"(?:(this|next)\s+)?{_WEEKDAY_GROUP}", text)
    if match:
        qualifier, weekday = match.group(1), WEEKDAYS[match.group(2)]
        days_ahead = (weekday - today.weekday()) % 7
        if qualifier == "next" and days_ahead == 0:
            days_ahead = 7
        return today + timedelta(days=days_ahead)

    return None


def _parse_absolute_date(text: str, today: date) -> date | None:
    """Parse absolute expressions like "December 31st" or "2026-12-31".

    Args:
        text: Normalized expression.
        today: Reference date for expressions without a year.

    Returns:
        Calculated date or None if not matched.
    """
    match = re.fullmatch(ISO_PATTERN, text)
    if match:
        return _safe_date(int(match.group(1)), int(match.group(2)), int(match.group(3)))

    # US order: "12/31" or "12/31/2026"
    match = re.fullmatch(SLASH_PATTERN, text)
    if match:
        year = match.group(3)
        if year is not None and len(year) == 2:
            year = f"20{year}"
        return _upcoming(
            today,
            int(match.group(1)),
            int(match.group(2)),
            int(year) if year else None,
        )

    match = re.fullmatch(MONTH_DAY_PATTERN, text)
    if match:
        return _upcoming(
            today,
            MONTHS[match.group(1)],
            int(match.group(2)),
            int(match.group(3)) if match.group(3) else None,
        )

    match = re.fullmatch(DAY_MONTH_PATTERN, text)
    if match:
        return _upcoming(
            today,
            MONTHS[match.group(2)],
            int(match.group(1)),
            int(match.group(3)) if match.group(3) else None,
        )

    return None


def parse_due_date(text: str, today: date | None = None) -> date | None:
    """Parse a natural-language date expression.

    Supports:
    - Relative: "today", "tomorrow", "in 2 days", "3 weeks from now",
      "next week", "next month", "end of month"
    - Weekdays: "friday", "this Friday", "next fri"
    - Absolute: "2026-12-31", "12/31", "12/31/2026", "December 31st",
      "Dec 31, 2026", "31st of December"

    Args:
        text: Date expression.
        today: Reference date. Defaults to today in the configured timezone.

    Returns:
        Parsed date, or None if the text is not a recognizable date or
        falls outside the supported date range. Never raises.

    Examples:
        >>> parse_due_date("in 2 days", date(2026, 10, 18))
        datetime.date(2026, 10, 20)
        >>> parse_due_date("December 31st", date(2026, 10, 18))
        datetime.date(2026, 12, 31)
        >>> parse_due_date("whenever", date(2026, 10, 18)) is None
        True
    """
    if not text or not text.strip():
        return None

    if today is None:
        from slashnote.config import settings

        today = datetime.now(settings.tzinfo).date()

    normalized = _normalize(text)

    result = _parse_relative_date(normalized, today)
    if result:
        return result

    return _parse_absolute_date(normalized, today)

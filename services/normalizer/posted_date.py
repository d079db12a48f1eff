"""
Posted Date Parsing

Providers report when a job was posted in one of two ways:
- an absolute timestamp (e.g. "2024-12-05T14:30:00.000Z" or Unix seconds)
- a relative phrase (e.g. "3 days ago", "2 weeks ago", "Just posted")

Both are reduced to a calendar date string (YYYY-MM-DD). Time of day is
always dropped.

Relative phrase rules, tested in order:
    "hour" | "minute" | "just posted"  -> today
    "<N> day(s)"                       -> today - N days
    "<N> week(s)"                      -> today - N * 7 days
    "<N> month(s)"                     -> today - N calendar months
    anything else                      -> today

Examples:
    >>> parse_posted_date("3 days ago", today=date(2024, 12, 10))
    '2024-12-07'
    >>> parse_posted_date("2 weeks ago", today=date(2024, 12, 10))
    '2024-11-26'
"""

import calendar
import logging
import re
from datetime import MAXYEAR, MINYEAR, date, datetime, timedelta, timezone
from typing import Any, Optional

logger = logging.getLogger(__name__)

_TODAY_PATTERN = re.compile(r"hour|minute|just posted")
_DAYS_PATTERN = re.compile(r"(\d+)\+?\s*days?\b")
_WEEKS_PATTERN = re.compile(r"(\d+)\+?\s*weeks?\b")
_MONTHS_PATTERN = re.compile(r"(\d+)\+?\s*months?\b")


def subtract_months(value: date, months: int) -> date:
    """
    Move a date back by whole calendar months.

    The day is clamped to the last day of the target month, so
    2024-03-31 minus one month is 2024-02-29.

    Raises:
        ValueError: If the result falls outside the supported date range
    """
    month_index = value.year * 12 + (value.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    if not MINYEAR <= year <= MAXYEAR:
        raise ValueError(f"year {year} is out of range")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(value.day, last_day))


def _resolve_relative(text: str, today: date) -> date:
    if _TODAY_PATTERN.search(text):
        return today

    match = _DAYS_PATTERN.search(text)
    if match:
        return today - timedelta(days=int(match.group(1)))

    match = _WEEKS_PATTERN.search(text)
    if match:
        return today - timedelta(days=int(match.group(1)) * 7)

    match = _MONTHS_PATTERN.search(text)
    if match:
        return subtract_months(today, int(match.group(1)))

    return today


def parse_relative_date(phrase: str, today: date) -> date:
    """
    Resolve a relative "N units ago" phrase against `today`.

    Counts that push the date out of range resolve to `today`.
    """
    try:
        return _resolve_relative(phrase.lower(), today)
    except (OverflowError, ValueError):
        logger.warning(
            "Relative posted date out of range, using today",
            extra={"phrase": phrase},
        )
        return today


def _parse_absolute(value: Any) -> Optional[date]:
    """Parse an ISO 8601 string or Unix timestamp, or return None."""
    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc).date()
        except (ValueError, OSError, OverflowError):
            logger.warning("Failed to parse Unix timestamp", extra={"value": value})
            return None

    if isinstance(value, str):
        cleaned = value.strip().replace("Z", "+00:00")
        try:
            return datetime.fromisoformat(cleaned).date()
        except ValueError:
            pass
        # Python < 3.11 rejects fractional seconds other than 3 or 6 digits
        try:
            return date.fromisoformat(cleaned[:10])
        except ValueError:
            return None

    return None


def parse_posted_date(value: Any, today: Optional[date] = None) -> str:
    """
    Reduce an absolute or relative posted-at value to a YYYY-MM-DD string.

    Never raises: missing or unrecognised values resolve to `today`.

    Args:
        value: ISO string, Unix seconds, date/datetime, relative phrase or None
        today: Reference date (defaults to the current UTC date)

    Returns:
        ISO calendar date string
    """
    reference = today or datetime.now(timezone.utc).date()

    if value is None or value == "":
        return reference.isoformat()

    absolute = _parse_absolute(value)
    if absolute is not None:
        return absolute.isoformat()

    if isinstance(value, str):
        return parse_relative_date(value, reference).isoformat()

    logger.warning(
        "Unsupported posted date type, using today",
        extra={"value": repr(value), "type": type(value).__name__},
    )
    return reference.isoformat()

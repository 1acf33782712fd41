"""Datetime parsing: lax input -> strict output."""

from __future__ import annotations

import re
from datetime import date, datetime, timezone

import pendulum

from pagesmith.exceptions import InvalidDate

# Strict output format: YYYY-MM-DD HH:MM:SS.ffffff±HHMM
STRICT_FORMAT = "%Y-%m-%d %H:%M:%S.%f%z"

DEFAULT_DISPLAY_FORMAT = "MMM D, YYYY"

# An offset only counts when it follows a time component; a bare date such
# as 2025-02-25 also ends in "-25".
_OFFSET_RE = re.compile(
    r"\d{1,2}:\d{2}(?::\d{2}(?:\.\d+)?)?\s*(?:Z|[+-]\d{2}(?::?\d{2})?)$",
    re.IGNORECASE,
)


def has_utc_offset(value: str) -> bool:
    """Return True if a timestamp string ends with an explicit UTC offset."""
    return bool(_OFFSET_RE.search(value.strip()))


def parse_datetime(
    value: str | date | datetime,
    default_tz: str = "UTC",
    require_offset: bool = False,
) -> datetime:
    """Parse a lax datetime value into a strict timezone-aware datetime.

    Accepts various formats:
    - 2025-02-25 10:00:00 +0800
    - 2025-02-25 10:00:00.975359+00:00
    - 2025-02-25T10:00:00Z
    - 2025-02-25 10:00
    - 2025-02-25
    - date and datetime objects (as produced by the YAML loader)

    Missing timezone defaults to default_tz unless require_offset is set,
    in which case the value is rejected.
    Missing time components default to zeros.
    Raises InvalidDate for anything that cannot be read as a timestamp.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            if require_offset:
                raise InvalidDate(f"Timestamp has no UTC offset: {value.isoformat()}")
            value = value.replace(tzinfo=pendulum.timezone(default_tz))
        return value

    if isinstance(value, date):
        if require_offset:
            raise InvalidDate(f"Timestamp has no UTC offset: {value.isoformat()}")
        return pendulum.datetime(value.year, value.month, value.day, tz=default_tz)

    if not isinstance(value, str):
        raise InvalidDate(f"Unsupported date value: {value!r}")

    value_str = value.strip()
    if not value_str:
        raise InvalidDate("Empty date value")
    if require_offset and not has_utc_offset(value_str):
        raise InvalidDate(f"Timestamp has no UTC offset: {value_str}")

    try:
        parsed = pendulum.parse(value_str, tz=default_tz, strict=False)
    except (ValueError, OverflowError) as exc:
        raise InvalidDate(f"Unparseable date {value_str!r}: {exc}") from None

    if isinstance(parsed, pendulum.DateTime):
        return parsed
    if isinstance(parsed, pendulum.Date):
        # pendulum.parse returns Date for date-only strings
        return pendulum.datetime(parsed.year, parsed.month, parsed.day, tz=default_tz)
    raise InvalidDate(f"Not a calendar timestamp: {value_str}")


def format_datetime(dt: datetime) -> str:
    """Format a datetime to the strict output format.

    Output: YYYY-MM-DD HH:MM:SS.ffffff+HHMM
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.strftime(STRICT_FORMAT)


def format_iso(dt: datetime) -> str:
    """Format datetime as ISO 8601 for machine-readable markup."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()


def format_display_date(dt: datetime, fmt: str = DEFAULT_DISPLAY_FORMAT) -> str:
    """Format a datetime for human readers, in its own timezone."""
    return pendulum.instance(dt).format(fmt)

"""Date conversion utilities.

Dates are stored as ISO-8601 UTC instants ("2025-09-05T03:00:00.000Z").
Calendar fields (day, month, year) are always read in the local timezone.
Every function here fails safe: bad input gives "" (or None) instead of
raising.
"""

import re
from datetime import date, datetime, timedelta, UTC
from typing import Optional

from dateutil.parser import isoparse

_DMY_PATTERN = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")


def to_iso(moment: datetime) -> str:
    """Serialize a datetime as a UTC ISO string with millisecond precision.

    Naive datetimes are taken as local time.
    """
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_iso() -> str:
    """Current instant as an ISO string."""
    return to_iso(datetime.now(UTC))


def parse_iso(iso: Optional[str]) -> Optional[datetime]:
    """Parse an ISO datetime string into a local, timezone-aware datetime.

    Returns:
        Local datetime, or None if the string is empty or not ISO-8601
    """
    if not iso:
        return None
    try:
        return isoparse(str(iso)).astimezone()
    except (ValueError, OverflowError, OSError):
        return None


def dmy_to_iso(text: Optional[str]) -> str:
    """Convert "dd/mm/yyyy" to an ISO datetime at local midnight.

    Day and month may have one or two digits; the year must have four.

    Returns:
        ISO string, or "" if the text does not match or is not a real
        calendar date (e.g. "31/02/2024")
    """
    if not text:
        return ""
    match = _DMY_PATTERN.match(str(text))
    if not match:
        return ""

    day, month, year = (int(part) for part in match.groups())
    try:
        return to_iso(datetime(year, month, day))
    except (ValueError, OverflowError, OSError):
        return ""


def iso_to_dmy(iso: Optional[str]) -> str:
    """Convert an ISO datetime to zero-padded "dd/mm/yyyy" in local time."""
    moment = parse_iso(iso)
    if moment is None:
        return ""
    return f"{moment.day:02d}/{moment.month:02d}/{moment.year:04d}"


def add_months(iso: Optional[str], months: int = 1) -> str:
    """Return local midnight of the same day-of-month, `months` later.

    Days past the end of the target month roll over into the next one
    rather than clamping: 31 Jan + 1 month is 3 Mar (2 Mar in leap years).

    Returns:
        ISO string, or "" if `iso` cannot be parsed
    """
    moment = parse_iso(iso)
    if moment is None:
        return ""

    year, month_index = divmod(moment.year * 12 + moment.month - 1 + months, 12)
    try:
        target = datetime(year, month_index + 1, 1) + timedelta(days=moment.day - 1)
        return to_iso(target)
    except (ValueError, OverflowError, OSError):
        return ""


def days_until(iso: Optional[str], today: Optional[date] = None) -> Optional[int]:
    """Whole calendar days from today to the local date of `iso`.

    Negative means overdue, zero means due today.

    Args:
        iso: Target ISO datetime
        today: Reference date (defaults to the local current date)

    Returns:
        Day count, or None if `iso` cannot be parsed
    """
    moment = parse_iso(iso)
    if moment is None:
        return None
    if today is None:
        today = date.today()
    return (moment.date() - today).days

"""Elapsed-time calculation for CSV time entries.

Date and time columns are joined as ``"<date> <time>"`` and parsed against
:data:`DATETIME_FORMATS` in order. The resulting wall-clock values are
localized to an explicit IANA zone and converted to UTC before subtracting,
so an interval crossing a DST change is measured in real elapsed time.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo

from invoicectl.domain.errors import InvalidTimeEntryError

DATETIME_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%d.%m.%Y %H:%M:%S",
    "%d.%m.%Y %H:%M",
)

DEFAULT_TIMEZONE = "UTC"


def parse_datetime(
    date_str: str,
    time_str: str,
    *,
    tz: tzinfo = UTC,
    line: int | None = None,
) -> datetime:
    """Parse a date and a time column into an aware ``datetime``.

    Raises:
        InvalidTimeEntryError: No format in :data:`DATETIME_FORMATS` matches.
    """
    combined = f"{date_str.strip()} {time_str.strip()}"
    for fmt in DATETIME_FORMATS:
        try:
            naive = datetime.strptime(combined, fmt)
        except ValueError:
            continue
        return naive.replace(tzinfo=tz)

    where = f" on line {line}" if line is not None else ""
    msg = f"Unrecognized date/time {combined!r}{where}"
    raise InvalidTimeEntryError(msg, line=line)


def elapsed_seconds(
    start_date: str,
    start_time: str,
    stop_date: str,
    stop_time: str,
    *,
    timezone: str = DEFAULT_TIMEZONE,
    line: int | None = None,
) -> int:
    """Whole seconds between start and stop, measured in UTC.

    Sum these per group and convert to minutes once.

    Examples:
        >>> elapsed_seconds("2024-03-01", "09:00:00", "2024-03-01", "09:45:00")
        2700

    Raises:
        InvalidTimeEntryError: A value is unparsable or stop precedes start.
    """
    tz = UTC if timezone == DEFAULT_TIMEZONE else ZoneInfo(timezone)
    start = parse_datetime(start_date, start_time, tz=tz, line=line)
    stop = parse_datetime(stop_date, stop_time, tz=tz, line=line)

    delta = stop.astimezone(UTC) - start.astimezone(UTC)
    if delta < timedelta(0):
        where = f" on line {line}" if line is not None else ""
        msg = f"Stop time is before start time{where}"
        raise InvalidTimeEntryError(msg, line=line)
    return delta // timedelta(seconds=1)

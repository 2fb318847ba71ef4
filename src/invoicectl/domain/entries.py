"""Time entries read from a time-tracking CSV export.

Only six columns are used; anything else in the export is ignored.
Rows are kept in file order because grouping depends on first appearance.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from invoicectl.domain.errors import CsvFormatError
from invoicectl.domain.timeparse import DEFAULT_TIMEZONE, elapsed_seconds

COL_DESCRIPTION = "Description"
COL_PROJECT = "Project"
COL_START_DATE = "Start date"
COL_START_TIME = "Start time"
COL_STOP_DATE = "Stop date"
COL_STOP_TIME = "Stop time"

REQUIRED_COLUMNS: tuple[str, ...] = (
    COL_DESCRIPTION,
    COL_START_DATE,
    COL_START_TIME,
    COL_STOP_DATE,
    COL_STOP_TIME,
)


@dataclass(frozen=True)
class TimeEntry:
    """One tracked interval from the CSV export."""

    description: str
    project: str
    start_date: str
    start_time: str
    stop_date: str
    stop_time: str
    line: int | None = None

    def seconds(self, *, timezone: str = DEFAULT_TIMEZONE) -> int:
        """Elapsed whole seconds between start and stop."""
        return elapsed_seconds(
            self.start_date,
            self.start_time,
            self.stop_date,
            self.stop_time,
            timezone=timezone,
            line=self.line,
        )

    @classmethod
    def from_row(cls, row: dict[str, str | None], *, line: int | None = None) -> TimeEntry:
        def cell(name: str) -> str:
            return (row.get(name) or "").strip()

        return cls(
            description=row.get(COL_DESCRIPTION) or "",
            project=cell(COL_PROJECT),
            start_date=cell(COL_START_DATE),
            start_time=cell(COL_START_TIME),
            stop_date=cell(COL_STOP_DATE),
            stop_time=cell(COL_STOP_TIME),
            line=line,
        )


def _is_blank(row: dict[str, str | None]) -> bool:
    return not any((value or "").strip() for value in row.values() if isinstance(value, str))


def parse_entries(lines: Iterable[str]) -> Iterator[TimeEntry]:
    """Yield a :class:`TimeEntry` for every non-blank row of CSV *lines*.

    Raises:
        CsvFormatError: The header is missing or lacks a required column.
    """
    reader = csv.DictReader(lines)
    header = reader.fieldnames
    if not header:
        msg = "CSV file has no header row"
        raise CsvFormatError(msg, line=1)

    present = {name.strip() for name in header}
    missing = [name for name in REQUIRED_COLUMNS if name not in present]
    if missing:
        msg = f"CSV header is missing column(s): {', '.join(missing)}"
        raise CsvFormatError(msg, line=1)

    if any(name != name.strip() for name in header):
        reader.fieldnames = [name.strip() for name in header]

    for row in reader:
        if _is_blank(row):
            continue
        yield TimeEntry.from_row(row, line=reader.line_num)


def read_entries(path: Path) -> list[TimeEntry]:
    """Read every time entry from the CSV file at *path*.

    The file is decoded as UTF-8; a leading byte-order mark is dropped.

    Raises:
        OSError: The file cannot be opened.
        CsvFormatError: The header is missing or incomplete.
    """
    with path.open(encoding="utf-8-sig", newline="") as fh:
        return list(parse_entries(fh))

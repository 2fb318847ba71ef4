"""Domain exceptions.

Services catch these and translate them into ``ServiceError`` payloads,
so every subclass carries a stable ``code``.
"""

from __future__ import annotations


class InvoiceDataError(ValueError):
    """Base class for problems with the time-tracking input."""

    code = "INVALID_DATA"

    def __init__(self, message: str, *, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line


class CsvFormatError(InvoiceDataError):
    """The CSV export is missing its header or a required column."""

    code = "CSV_FORMAT"


class InvalidTimeEntryError(InvoiceDataError):
    """A row has a date/time that cannot be parsed or an inverted interval."""

    code = "INVALID_ENTRY"


class EmptyTimesheetError(InvoiceDataError):
    """There are no time entries to bill."""

    code = "EMPTY_TIMESHEET"

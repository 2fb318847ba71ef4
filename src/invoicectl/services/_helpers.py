"""Shared service-layer helper functions."""

from __future__ import annotations

import re
from datetime import date

_WHITESPACE = re.compile(r"\s+")


def invoice_date(today: date) -> str:
    """Invoice date as MM-DD-YYYY."""
    return today.strftime("%m-%d-%Y")


def invoice_number(today: date) -> str:
    """Sequential invoice number derived from the date (YYYYMMDD)."""
    return today.strftime("%Y%m%d")


def sanitize_code(code: str) -> str:
    """Replace each run of whitespace in a client code with a hyphen.

    Examples:
        >>> sanitize_code("ACME Corp")
        'ACME-Corp'
        >>> sanitize_code("big   client  ltd")
        'big-client-ltd'
    """
    return _WHITESPACE.sub("-", code)


def output_basename(number: str, client_code: str) -> str:
    """File name stem shared by the HTML and PDF outputs."""
    return f"invoice-{number}-{sanitize_code(client_code)}"

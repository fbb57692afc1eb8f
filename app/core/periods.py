"""
Month-year period helpers.

Periods travel over the wire as ``MM-YYYY`` tokens ("01-2024") and are
stored as the first calendar day of that month.
"""
from __future__ import annotations

import re
from datetime import date
from typing import Optional

from app.core.exceptions import EmptyDateError, InvalidDateFormatError

__all__ = [
    "PERIOD_FORMAT",
    "parse_period",
    "parse_optional_period",
    "format_period",
    "month_index",
]

PERIOD_FORMAT = "MM-YYYY"

_PERIOD_RE = re.compile(r"(0[1-9]|1[0-2])-([0-9]{4})")


def parse_period(token: str) -> date:
    """
    Convert an 'MM-YYYY' token to the first day of that month.
    Examples: '01-2024' -> date(2024, 1, 1), '12-2030' -> date(2030, 12, 1).
    """
    if token is None or token == "":
        raise EmptyDateError()
    match = _PERIOD_RE.fullmatch(token)
    if match is None:
        raise InvalidDateFormatError(token)
    try:
        return date(int(match.group(2)), int(match.group(1)), 1)
    except ValueError:
        # year 0000
        raise InvalidDateFormatError(token) from None


def parse_optional_period(token: Optional[str]) -> Optional[date]:
    """Like parse_period, but an absent or empty token yields None."""
    if token is None or token == "":
        return None
    return parse_period(token)


def format_period(value: date) -> str:
    """Render a date as its 'MM-YYYY' month token."""
    return f"{value.month:02d}-{value.year:04d}"


def month_index(value: date) -> int:
    """Linear month counter: year * 12 + month."""
    return value.year * 12 + value.month

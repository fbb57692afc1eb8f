"""
Proration of monthly subscription prices over a billing window.

A subscription is billed for every calendar month its active interval
``[start_date, end_date)`` shares with the query window
``[period_start, period_end)``. An open-ended subscription (no end date)
runs through the end of any finite window.
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional, Protocol

from app.core.periods import month_index

ONE_DAY = timedelta(days=1)


class BillableRecord(Protocol):
    user_id: str
    service_name: str
    price: int
    start_date: date
    end_date: Optional[date]


def is_candidate(
    record: BillableRecord,
    user_id: str,
    service_name: str,
    period_start: date,
    period_end: date,
) -> bool:
    """Return True when the record belongs to the user/service and may overlap the window."""
    return (
        record.user_id == user_id
        and record.service_name == service_name
        and (record.end_date is None or record.end_date > period_start)
        and record.start_date < period_end
    )


def overlap_window(
    record: BillableRecord, period_start: date, period_end: date
) -> Optional[tuple[date, date]]:
    """Intersect the record's active interval with the window, or None if empty."""
    actual_start = max(record.start_date, period_start)
    if record.end_date is None:
        actual_end = period_end
    else:
        actual_end = min(record.end_date, period_end)

    if actual_start >= actual_end:
        return None
    return actual_start, actual_end


def billed_months(actual_start: date, actual_end: date) -> int:
    """
    Count the whole calendar months billed for ``[actual_start, actual_end)``.

    The end is anchored on the last billed day, so an interval that stops on
    the 1st of a month is not charged for that month.
    """
    last_month = month_index(actual_end - ONE_DAY)
    first_month = month_index(actual_start)
    return max(0, last_month - first_month + 1)


def record_cost(
    record: BillableRecord,
    user_id: str,
    service_name: str,
    period_start: date,
    period_end: date,
) -> int:
    """Contribution of a single record to the total, 0 when it does not apply."""
    if not is_candidate(record, user_id, service_name, period_start, period_end):
        return 0

    window = overlap_window(record, period_start, period_end)
    if window is None:
        return 0

    return record.price * billed_months(*window)


def sum_total_cost(
    records: Iterable[BillableRecord],
    user_id: str,
    service_name: str,
    period_start: date,
    period_end: date,
) -> int:
    """Total paid by ``user_id`` for ``service_name`` during the window."""
    return sum(
        record_cost(record, user_id, service_name, period_start, period_end)
        for record in records
    )

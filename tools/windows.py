"""Named dashboard windows mapped onto the monthly period grid."""

from datetime import date
from typing import Iterable, Optional, Tuple

from tools.recurrence import as_date

WINDOW_LABELS = {
    "3m": "Last 3 Months",
    "6m": "Last 6 Months",
    "ytd": "Year to Date",
    "1y": "Last 12 Months",
    "12m": "Last 12 Months",
    "all": "All Time",
}

DEFAULT_WINDOW = "12m"

_TRAILING_MONTHS = {"3m": 3, "6m": 6, "1y": 12, "12m": 12}


def _months_between(start: date, end: date) -> int:
    """Whole calendar months from start's month to end's month, inclusive."""
    return (end.year - start.year) * 12 + (end.month - start.month) + 1


def _trailing(today: date, months: int) -> Tuple[date, int]:
    year, month = today.year, today.month - (months - 1)
    while month < 1:
        month += 12
        year -= 1
    return date(year, month, 1), months


def window_range(
    window: str, today: date, earliest_date: Optional[date] = None
) -> Tuple[date, int]:
    """Map a named window to (anchor_date, period_count) for monthly periods.

    Args:
        window: One of "3m", "6m", "ytd", "1y", "12m" or "all". Unknown
                names fall back to the last 12 months.
        today: Reference date; its month is always the last period.
        earliest_date: Earliest transaction date, used by "all".

    Returns:
        The first day of the first month and the number of months to show.
    """
    if window in _TRAILING_MONTHS:
        return _trailing(today, _TRAILING_MONTHS[window])

    if window == "ytd":
        return date(today.year, 1, 1), today.month

    if window == "all":
        if earliest_date is None:
            return _trailing(today, 12)
        start = min(earliest_date, today)
        anchor = date(start.year, start.month, 1)
        return anchor, _months_between(anchor, today)

    return _trailing(today, 12)


def earliest_transaction_date(*groups: Iterable) -> Optional[date]:
    """Earliest valid date across any number of transaction lists."""
    dates = [
        day
        for transactions in groups
        for day in (as_date(t.date) for t in transactions)
        if day is not None
    ]
    return min(dates) if dates else None

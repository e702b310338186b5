"""Recurrence expansion: which dates does a recurring transaction fall on?

Every function here works on a half-open window [start, end) and returns the
occurrence dates inside it in ascending order. Weekdays use the convention
stored with transactions: 0=Sunday .. 6=Saturday.
"""

from datetime import date, datetime, timedelta
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from models.transaction import (
    ANNUALLY,
    FORTNIGHTLY,
    FOUR_WEEKLY,
    FREQUENCIES,
    MONTHLY,
    WEEKDAY_FREQUENCIES,
    WEEKLY,
    Transaction,
)

# Whole weeks between occurrences for the weekday-based frequencies
_WEEK_INTERVALS = {WEEKLY: 1, FORTNIGHTLY: 2, FOUR_WEEKLY: 4}


def as_date(value) -> Optional[date]:
    """Coerce a date, datetime or ISO string to a date; None if impossible."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def sunday_weekday(day: date) -> int:
    """Day of week with Sunday as 0, matching stored frequency_day values."""
    return (day.weekday() + 1) % 7


def effective_frequency(transaction: Transaction) -> str:
    """Frequency used for expansion. Missing or unknown values mean monthly."""
    if transaction.frequency in FREQUENCIES:
        return transaction.frequency
    return MONTHLY


def effective_frequency_day(transaction: Transaction, start_date: date) -> int:
    """Resolve frequency_day, falling back to the day implied by the start date."""
    frequency = effective_frequency(transaction)
    day = transaction.frequency_day
    if not isinstance(day, int) or isinstance(day, bool):
        day = None

    if frequency in WEEKDAY_FREQUENCIES:
        if day is not None and 0 <= day <= 6:
            return day
        return sunday_weekday(start_date)

    if frequency == MONTHLY and day is not None and 1 <= day <= 31:
        return day
    return start_date.day


def weekday_dates(
    start_date: date,
    weekday: int,
    start: date,
    end: date,
    interval_weeks: int = 1,
) -> List[date]:
    """Dates in [start, end) on the given weekday, on or after start_date,
    whose whole weeks elapsed since start_date is a multiple of interval_weeks.
    """
    first = start + timedelta(days=(weekday - sunday_weekday(start)) % 7)

    dates = []
    day = first
    while day < end:
        if day >= start_date:
            elapsed_weeks = (day - start_date).days // 7
            if elapsed_weeks % interval_weeks == 0:
                dates.append(day)
        day += timedelta(days=7)
    return dates


def monthly_dates(
    start_date: date, day_of_month: int, start: date, end: date
) -> List[date]:
    """One date per calendar month in [start, end), from start_date's month on.

    The day is clamped to the month length (31 becomes 28/29 in February),
    so an occurrence never spills into the following month.
    """
    first_month = date(start_date.year, start_date.month, 1)
    month = max(date(start.year, start.month, 1), first_month)

    dates = []
    while month < end:
        day = month + relativedelta(day=day_of_month)
        if start <= day < end:
            dates.append(day)
        month += relativedelta(months=1)
    return dates


def annual_dates(start_date: date, start: date, end: date) -> List[date]:
    """Anniversaries of start_date in [start, end).

    Anniversaries that do not exist in a given year (29 February) are skipped.
    """
    dates = []
    last_day = end - timedelta(days=1)
    for year in range(max(start.year, start_date.year), last_day.year + 1):
        try:
            day = start_date.replace(year=year)
        except ValueError:
            continue
        if start <= day < end and day >= start_date:
            dates.append(day)
    return dates


def occurrence_dates(transaction: Transaction, start: date, end: date) -> List[date]:
    """Expand a recurring transaction into its occurrence dates within [start, end).

    Payment end dates are not applied here; the projector gates whole periods
    on them. The caller is responsible for skipping transactions without a
    valid date.

    Args:
        transaction: Recurring income or payment.
        start: First day of the window (inclusive).
        end: Day after the last day of the window (exclusive).

    Returns:
        Ascending list of occurrence dates.
    """
    start_date = as_date(transaction.date)
    if start_date is None or start >= end:
        return []

    frequency = effective_frequency(transaction)

    if frequency in WEEKDAY_FREQUENCIES:
        dates = weekday_dates(
            start_date,
            effective_frequency_day(transaction, start_date),
            start,
            end,
            interval_weeks=_WEEK_INTERVALS[frequency],
        )
    elif frequency == ANNUALLY:
        dates = annual_dates(start_date, start, end)
    else:
        dates = monthly_dates(
            start_date, effective_frequency_day(transaction, start_date), start, end
        )

    return dates

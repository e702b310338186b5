"""Recurrence projector.

Turns income and payment transactions into a fixed grid of periods with
income, expenses and a running balance. This is the one place dashboard and
forecast figures are computed; both are thin callers in tools.reports.

The projector is a pure function of its arguments. It never mutates the
transactions it is given and never raises for a malformed transaction:
records with a missing/unparseable date or a missing/NaN/negative amount
are skipped and logged at DEBUG level.
"""

from bisect import bisect_right
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, List, Optional, Tuple

from dateutil.relativedelta import relativedelta

from logger import get_logger
from models.projection import Occurrence, Period, ProjectionSummary
from models.transaction import Transaction
from tools.recurrence import as_date, occurrence_dates

logger = get_logger()

DAILY = "daily"
WEEKLY = "weekly"
MONTHLY = "monthly"

GRANULARITIES = (DAILY, WEEKLY, MONTHLY)

_CENT = Decimal("0.01")


def to_cents(value: Decimal) -> Decimal:
    """Round half-up to two decimal places."""
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def period_label(granularity: str, period_start: date) -> str:
    """Display label: "Jan 2024" for months, "Jan 1, 2024" otherwise."""
    if granularity == MONTHLY:
        return f"{period_start:%b %Y}"
    return f"{period_start:%b} {period_start.day}, {period_start.year}"


def generate_periods(
    granularity: str, period_count: int, anchor_date: date
) -> List[Period]:
    """Build the empty period grid.

    Every grid starts at anchor_date. Daily periods are single days, weekly
    periods are seven days and monthly periods run from one monthly
    anniversary of anchor_date to the next (calendar months when anchored on
    the 1st).

    Args:
        granularity: "daily", "weekly" or "monthly". Anything else is treated
                     as monthly.
        period_count: Number of periods; zero or less gives an empty grid.
        anchor_date: First date of the first period.

    Returns:
        period_count periods in chronological order.
    """
    if period_count <= 0:
        return []

    if granularity not in GRANULARITIES:
        logger.warning(f"Unknown granularity '{granularity}', using monthly")
        granularity = MONTHLY

    if granularity == DAILY:
        step = timedelta(days=1)
    elif granularity == WEEKLY:
        step = timedelta(days=7)
    else:
        step = relativedelta(months=1)

    periods = []
    period_start = anchor_date
    for i in range(1, period_count + 1):
        # Step from the anchor, not the previous end, so month-end anchors hold
        period_end = anchor_date + step * i
        periods.append(
            Period(
                label=period_label(granularity, period_start),
                period_start=period_start,
                period_end=period_end,
            )
        )
        period_start = period_end
    return periods


def _decimal_or_zero(value) -> Decimal:
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return Decimal("0")
    return amount if amount.is_finite() else Decimal("0")


def _valid_amount(value) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return None
    if amount.is_nan() or amount.is_infinite() or amount < 0:
        return None
    return amount


def _occurrences(
    transactions: Iterable[Transaction], window_start: date, window_end: date
) -> List[Tuple[date, Occurrence, date, Optional[date]]]:
    """Expand transactions into (date, occurrence, start, end date) tuples.

    The end date is only set for recurring payments that have one.
    """
    expanded = []
    for transaction in transactions:
        start_date = as_date(transaction.date)
        amount = _valid_amount(transaction.amount)
        if start_date is None or amount is None:
            logger.debug(
                f"Skipping malformed transaction {transaction.id!r} "
                f"({transaction.description!r}): date={transaction.date!r}, "
                f"amount={transaction.amount!r}"
            )
            continue

        end_date = None
        if transaction.recurring:
            dates = occurrence_dates(transaction, window_start, window_end)
            end_date = as_date(getattr(transaction, "end_date", None))
        elif window_start <= start_date < window_end:
            dates = [start_date]
        else:
            dates = []

        for day in dates:
            occurrence = Occurrence(
                source_transaction_id=transaction.id,
                description=transaction.description,
                amount=amount,
                occurrence_date=day,
                is_recurring_instance=bool(transaction.recurring),
            )
            expanded.append((day, occurrence, start_date, end_date))
    return expanded


def _bucket(
    periods: List[Period],
    expanded: List[Tuple[date, Occurrence, date, Optional[date]]],
    attribute: str,
) -> List[Decimal]:
    """Add occurrences to their periods; return the unrounded total per period.

    An occurrence only counts if its transaction has started by the end of the
    period it lands in (monthly recurrences may fall earlier in the start month)
    and, for end-dated payments, if that period starts on or before the end
    date. The end date gates whole periods, not single occurrences.
    """
    starts = [period.period_start for period in periods]
    totals = [Decimal("0")] * len(periods)

    for day, occurrence, start_date, end_date in expanded:
        index = bisect_right(starts, day) - 1
        if index < 0 or not periods[index].contains(day):
            continue
        if start_date >= periods[index].period_end:
            continue
        if end_date is not None and periods[index].period_start > end_date:
            continue
        totals[index] += occurrence.amount
        getattr(periods[index], attribute).append(occurrence)

    for period in periods:
        getattr(period, attribute).sort(key=lambda occ: occ.occurrence_date)
    return totals


def project(
    incomes: Iterable[Transaction],
    payments: Iterable[Transaction],
    start_balance,
    granularity: str,
    period_count: int,
    anchor_date: date,
) -> List[Period]:
    """Project incomes and payments onto a period grid with a running balance.

    Args:
        incomes: Income transactions, recurring or one-time.
        payments: Payment transactions, recurring or one-time.
        start_balance: Balance before the first period.
        granularity: "daily", "weekly" or "monthly".
        period_count: Number of periods to produce.
        anchor_date: First date of the first period.

    Returns:
        Periods in chronological order. Income, expenses, net change and
        running balance are each rounded to cents; the running balance itself
        is accumulated unrounded.
    """
    periods = generate_periods(granularity, period_count, anchor_date)
    if not periods:
        return []

    window_start = periods[0].period_start
    window_end = periods[-1].period_end

    income_totals = _bucket(
        periods, _occurrences(incomes, window_start, window_end), "income_occurrences"
    )
    expense_totals = _bucket(
        periods,
        _occurrences(payments, window_start, window_end),
        "expense_occurrences",
    )

    balance = _decimal_or_zero(start_balance)

    for period, income, expenses in zip(periods, income_totals, expense_totals):
        net = income - expenses
        balance += net
        period.income = to_cents(income)
        period.expenses = to_cents(expenses)
        period.net_change = to_cents(net)
        period.running_balance = to_cents(balance)

    return periods


def summarize(periods: List[Period], start_balance) -> ProjectionSummary:
    """Summary-card figures: totals, start and end balance.

    Args:
        periods: Output of project().
        start_balance: The balance the projection started from.

    Returns:
        ProjectionSummary; the end balance equals the start balance when
        there are no periods.
    """
    start = to_cents(_decimal_or_zero(start_balance))
    total_income = sum((period.income for period in periods), Decimal("0"))
    total_expenses = sum((period.expenses for period in periods), Decimal("0"))

    return ProjectionSummary(
        total_income=total_income,
        total_expenses=total_expenses,
        net_balance=total_income - total_expenses,
        start_balance=start,
        end_balance=periods[-1].running_balance if periods else start,
    )

"""Dashboard and forecast reports built on the shared projector."""

from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from logger import get_logger
from models.budget import BudgetSnapshot
from models.projection import Period, ProjectionSummary
from models.transaction import Payment
from tools.filters import filter_snapshot
from tools.projection import MONTHLY, project, summarize
from tools.windows import DEFAULT_WINDOW, earliest_transaction_date, window_range

logger = get_logger()

UNCATEGORIZED = "Uncategorized"


def dashboard(
    snapshot: BudgetSnapshot,
    window: str = DEFAULT_WINDOW,
    today: Optional[date] = None,
    account_ids: Optional[Iterable[int]] = None,
) -> Tuple[List[Period], ProjectionSummary]:
    """Monthly history over a named window, starting from the settings balance.

    Args:
        snapshot: Budget snapshot from the read model.
        window: Named window, see tools.windows.window_range.
        today: Reference date (defaults to today).
        account_ids: Optional account selection; None means all accounts.

    Returns:
        Tuple of (periods, summary).
    """
    today = today or date.today()
    snapshot = filter_snapshot(snapshot, account_ids)
    earliest = earliest_transaction_date(snapshot.incomes, snapshot.payments)
    anchor, count = window_range(window, today, earliest)

    logger.debug(
        f"Dashboard window {window}: {count} month(s) from {anchor.isoformat()}, "
        f"{len(snapshot.incomes)} income(s), {len(snapshot.payments)} payment(s)"
    )

    start_balance = snapshot.settings.start_balance
    periods = project(
        snapshot.incomes, snapshot.payments, start_balance, MONTHLY, count, anchor
    )
    return periods, summarize(periods, start_balance)


def forecast(
    snapshot: BudgetSnapshot,
    granularity: str = MONTHLY,
    periods: int = 12,
    start_balance=None,
    today: Optional[date] = None,
    account_ids: Optional[Iterable[int]] = None,
) -> Tuple[List[Period], ProjectionSummary]:
    """Forward-looking projection starting today.

    Args:
        snapshot: Budget snapshot from the read model.
        granularity: "daily", "weekly" or "monthly".
        periods: Number of periods to project.
        start_balance: Balance to start from; defaults to the settings value.
        today: Anchor date (defaults to today).
        account_ids: Optional account selection; None means all accounts.

    Returns:
        Tuple of (periods, summary).
    """
    today = today or date.today()
    snapshot = filter_snapshot(snapshot, account_ids)
    if start_balance is None:
        start_balance = snapshot.settings.start_balance

    logger.debug(
        f"Forecast: {periods} {granularity} period(s) from {today.isoformat()}, "
        f"start balance {start_balance}"
    )

    result = project(
        snapshot.incomes,
        snapshot.payments,
        start_balance,
        granularity,
        periods,
        today,
    )
    return result, summarize(result, start_balance)


def category_breakdown(
    periods: List[Period], payments: Iterable[Payment]
) -> Dict[str, Decimal]:
    """Total projected expenses per category name, largest first.

    Args:
        periods: Output of the projector.
        payments: The payments that were projected (for category names).

    Returns:
        Mapping of category name to total, with uncategorized payments
        grouped under "Uncategorized".
    """
    names = {payment.id: payment.category_name or UNCATEGORIZED for payment in payments}

    totals: Dict[str, Decimal] = {}
    for period in periods:
        for occurrence in period.expense_occurrences:
            name = names.get(occurrence.source_transaction_id, UNCATEGORIZED)
            totals[name] = totals.get(name, Decimal("0")) + occurrence.amount

    return dict(sorted(totals.items(), key=lambda item: (-item[1], item[0])))

#!/usr/bin/env python3

from logger import get_logger
from tools.filters import active_account_ids
from tools.formatting import format_date, format_money
from tools.projection import GRANULARITIES
from tools.reports import category_breakdown, dashboard, forecast
from tools.windows import DEFAULT_WINDOW, WINDOW_LABELS
from cli.arguments import amount_arg

logger = get_logger()


def _selected_accounts(args, snapshot):
    """Explicit --account-id values, else every active account."""
    if args.account_ids:
        return args.account_ids
    return active_account_ids(snapshot.accounts)


def _log_periods(periods, settings, show_details=False):
    currency = settings.currency
    logger.info(
        f"{'Period':<16}{'Income':>16}{'Expenses':>16}{'Net':>16}{'Balance':>16}"
    )
    logger.info("-" * 80)
    for period in periods:
        logger.info(
            f"{period.label:<16}"
            f"{format_money(period.income, currency):>16}"
            f"{format_money(period.expenses, currency):>16}"
            f"{format_money(period.net_change, currency):>16}"
            f"{format_money(period.running_balance, currency):>16}"
        )
        if not show_details:
            continue
        for sign, occurrences in (
            ("+", period.income_occurrences),
            ("-", period.expense_occurrences),
        ):
            for occurrence in occurrences:
                marker = " (recurring)" if occurrence.is_recurring_instance else ""
                logger.info(
                    f"    {sign} {format_date(occurrence.occurrence_date, settings.date_format)} "
                    f"{occurrence.description}{marker}: "
                    f"{format_money(occurrence.amount, currency)}"
                )


def _log_summary(summary, currency):
    logger.info("=" * 80)
    logger.info(f"Total income:   {format_money(summary.total_income, currency)}")
    logger.info(f"Total expenses: {format_money(summary.total_expenses, currency)}")
    logger.info(f"Net:            {format_money(summary.net_balance, currency)}")
    logger.info(f"Start balance:  {format_money(summary.start_balance, currency)}")
    logger.info(f"End balance:    {format_money(summary.end_balance, currency)}")


def cmd_dashboard(args, services):
    """Show monthly income, expenses and balance over a named window."""
    snapshot = services.budget.snapshot()
    account_ids = _selected_accounts(args, snapshot)

    periods, summary = dashboard(snapshot, window=args.window, account_ids=account_ids)

    if not snapshot.incomes and not snapshot.payments:
        logger.info("No transactions found.")
        return

    title = WINDOW_LABELS.get(args.window, WINDOW_LABELS[DEFAULT_WINDOW])
    logger.info(f"\nDashboard: {title}")
    logger.info("=" * 80)
    _log_periods(periods, snapshot.settings)
    _log_summary(summary, snapshot.settings.currency)

    breakdown = category_breakdown(periods, snapshot.payments)
    if breakdown:
        logger.info("\nExpenses by category:")
        for name, total in breakdown.items():
            logger.info(f"  {name:<30}{format_money(total, snapshot.settings.currency):>16}")


def cmd_forecast(args, services):
    """Project the balance forward from today."""
    snapshot = services.budget.snapshot()
    account_ids = _selected_accounts(args, snapshot)
    granularity = args.granularity or services.config.forecast_granularity
    count = args.periods or services.config.forecast_periods

    periods, summary = forecast(
        snapshot,
        granularity=granularity,
        periods=count,
        start_balance=args.start_balance,
        account_ids=account_ids,
    )

    logger.info(f"\nForecast: next {count} {granularity} period(s)")
    logger.info("=" * 80)
    _log_periods(periods, snapshot.settings, show_details=args.details)
    _log_summary(summary, snapshot.settings.currency)


def setup_parser(subparsers):
    """Setup report subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "report",
        help="Dashboard and forecast reports",
        description="Summaries computed from incomes and payments",
    )

    report_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available reports",
        dest="subcommand",
        required=True,
    )

    dashboard_parser = report_subparsers.add_parser(
        "dashboard", help="Monthly history over a named window"
    )
    dashboard_parser.add_argument(
        "--window",
        choices=sorted(WINDOW_LABELS),
        default=DEFAULT_WINDOW,
        help="Time window (default: 12m)",
    )
    dashboard_parser.add_argument(
        "--account-id",
        dest="account_ids",
        type=int,
        action="append",
        help="Limit to an account (repeatable); defaults to all active accounts",
    )
    dashboard_parser.set_defaults(func=cmd_dashboard)

    forecast_parser = report_subparsers.add_parser(
        "forecast", help="Project the balance forward from today"
    )
    forecast_parser.add_argument("--granularity", choices=GRANULARITIES)
    forecast_parser.add_argument("--periods", type=int, help="Number of periods")
    forecast_parser.add_argument(
        "--start-balance",
        type=amount_arg,
        help="Balance to start from (default: settings start balance)",
    )
    forecast_parser.add_argument(
        "--account-id",
        dest="account_ids",
        type=int,
        action="append",
        help="Limit to an account (repeatable); defaults to all active accounts",
    )
    forecast_parser.add_argument(
        "--details",
        action="store_true",
        help="List the occurrences behind each period",
    )
    forecast_parser.set_defaults(func=cmd_forecast)

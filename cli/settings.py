#!/usr/bin/env python3

import sys
from cli.arguments import amount_arg
from logger import get_logger
from tools.formatting import format_money

logger = get_logger()


def cmd_show(args, services):
    """Show the current settings."""
    settings = services.settings.get()

    logger.info("\nSettings:")
    logger.info("=" * 80)
    logger.info(f"Currency: {settings.currency}")
    logger.info(f"Start balance: {format_money(settings.start_balance, settings.currency)}")
    logger.info(f"Date format: {settings.date_format}")
    logger.info(f"Notifications: {'on' if settings.enable_notifications else 'off'}")
    logger.info(f"Balance in header: {'on' if settings.show_balance_in_header else 'off'}")


def cmd_set(args, services):
    """Change one or more settings; unspecified values are kept."""
    current = services.settings.get()

    def toggle(value, existing):
        return existing if value is None else value == "on"

    try:
        settings = services.settings.update(
            currency=args.currency or current.currency,
            start_balance=(
                args.start_balance if args.start_balance is not None else current.start_balance
            ),
            date_format=args.date_format or current.date_format,
            enable_notifications=toggle(args.notifications, current.enable_notifications),
            show_balance_in_header=toggle(
                args.balance_in_header, current.show_balance_in_header
            ),
        )
    except Exception as e:
        logger.error(f"Error updating settings: {e}")
        sys.exit(1)

    logger.info("✓ Settings updated.")
    logger.info(f"  Currency: {settings.currency}")
    logger.info(f"  Start balance: {format_money(settings.start_balance, settings.currency)}")


def setup_parser(subparsers):
    """Setup settings subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "settings",
        help="View and change settings",
        description="Currency, start balance and display preferences",
    )

    settings_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available settings commands",
        dest="subcommand",
        required=True,
    )

    show_parser = settings_subparsers.add_parser("show", help="Show current settings")
    show_parser.set_defaults(func=cmd_show)

    set_parser = settings_subparsers.add_parser("set", help="Change settings")
    set_parser.add_argument("--currency", help="ISO currency code, e.g. GBP")
    set_parser.add_argument(
        "--start-balance", type=amount_arg, help="Balance all projections start from"
    )
    set_parser.add_argument("--date-format", help="e.g. MM/DD/YYYY or DD/MM/YYYY")
    set_parser.add_argument("--notifications", choices=("on", "off"))
    set_parser.add_argument("--balance-in-header", choices=("on", "off"))
    set_parser.set_defaults(func=cmd_set)

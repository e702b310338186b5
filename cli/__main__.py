#!/usr/bin/env python3
"""
Tally CLI - Command-line interface for tracking income, payments and forecasts.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    accounts     Manage accounts
    categories   Manage payment categories
    incomes      Record one-time and recurring incomes
    payments     Record one-time and recurring payments
    settings     Currency, start balance and display preferences
    report       Dashboard and forecast reports
    migrate      Database migrations

Examples:
    python -m cli migrate apply
    python -m cli categories seed
    python -m cli incomes add "Salary" 2500 2024-01-26 --frequency monthly
    python -m cli payments add "Rent" 1200 2024-01-01 --frequency monthly --category-id 1
    python -m cli report dashboard --window 6m
    python -m cli report forecast --granularity weekly --periods 26
"""

import sys
import argparse
from cli import accounts, categories, incomes, payments, settings, report, migrate
from config import load_config
from services.base import Services
from db.manager import DatabaseManager
from logger import get_logger, setup_logging

SERVICE_COMMANDS = (
    "accounts",
    "categories",
    "incomes",
    "payments",
    "settings",
    "report",
)


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Tally - Personal finance tracking and cash-flow forecasting",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Only print warnings and errors"
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    for module in (accounts, categories, incomes, payments, settings, report, migrate):
        module.setup_parser(subparsers)

    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    try:
        config = load_config()
        setup_logging(config, quiet=args.quiet)

        # Commands that use services get the container; migrate works on
        # the raw database manager.
        if args.command in SERVICE_COMMANDS:
            args.func(args, Services(config))
        elif args.command == "migrate":
            args.func(args, DatabaseManager(config))
        else:
            args.func(args)
    except Exception as e:
        get_logger().error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3

import sys
from cli.arguments import add_transaction_arguments, confirm
from logger import get_logger
from models.transaction import Income
from tools.formatting import format_date, format_money

logger = get_logger()


def describe_recurrence(transaction) -> str:
    """Short recurrence text for listings, e.g. "monthly (day 15)"."""
    if not transaction.recurring:
        return "one-time"
    text = transaction.frequency or "monthly"
    if transaction.frequency_day is not None:
        text += f" (day {transaction.frequency_day})"
    return text


def cmd_list(args, services):
    """List all incomes, newest first."""
    settings = services.settings.get()
    incomes = services.incomes.find_all()

    if not incomes:
        logger.info("No incomes found.")
        return

    logger.info("\nIncomes:")
    logger.info("=" * 80)
    for income in incomes:
        when = format_date(income.date, settings.date_format) if income.date else "invalid date"
        logger.info(
            f"{income.id:>5}  {when:<12} {format_money(income.amount, settings.currency):>14}  "
            f"{income.description}  [{describe_recurrence(income)}]"
            + (f"  @ {income.account_name}" if income.account_name else "")
        )

    logger.info(f"\nTotal incomes: {len(incomes)}")


def cmd_add(args, services):
    """Record a new income."""
    income = Income(
        id=None,
        description=args.description,
        amount=args.amount,
        date=args.date,
        recurring=args.frequency is not None,
        frequency=args.frequency,
        frequency_day=args.frequency_day,
        account_id=args.account_id,
    )

    try:
        income = services.incomes.create(income)
    except Exception as e:
        logger.error(f"Error creating income: {e}")
        sys.exit(1)

    logger.info(f"✓ Income created with ID: {income.id} ({describe_recurrence(income)})")


def cmd_delete(args, services):
    """Delete an income by ID."""
    income = services.incomes.find(args.income_id)
    if not income:
        logger.error(f"Income with ID {args.income_id} not found.")
        sys.exit(1)

    logger.info(f"\nIncome to delete: {income.description} ({income.amount})")
    if not confirm("Are you sure you want to delete this income?", args.yes):
        logger.info("Deletion cancelled.")
        return

    if services.incomes.delete(income.id):
        logger.info("✓ Income deleted successfully.")
    else:
        logger.error("Failed to delete income.")
        sys.exit(1)


def setup_parser(subparsers):
    """Setup incomes subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "incomes",
        help="Manage incomes",
        description="Record, list and delete one-time and recurring incomes",
    )

    incomes_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available income commands",
        dest="subcommand",
        required=True,
    )

    list_parser = incomes_subparsers.add_parser("list", help="List all incomes")
    list_parser.set_defaults(func=cmd_list)

    add_parser = incomes_subparsers.add_parser("add", help="Record a new income")
    add_transaction_arguments(add_parser)
    add_parser.set_defaults(func=cmd_add)

    delete_parser = incomes_subparsers.add_parser("delete", help="Delete an income by ID")
    delete_parser.add_argument("income_id", type=int, help="ID of the income to delete")
    delete_parser.add_argument("--yes", action="store_true", help="Skip confirmation")
    delete_parser.set_defaults(func=cmd_delete)

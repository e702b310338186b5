"""Argument types shared by the CLI command modules."""

import argparse
from datetime import date
from decimal import Decimal, InvalidOperation

from models.transaction import FREQUENCIES, PAYMENT_TYPES


def date_arg(value: str) -> date:
    """argparse type for YYYY-MM-DD dates."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD")


def amount_arg(value: str) -> Decimal:
    """argparse type for money amounts."""
    try:
        amount = Decimal(value.replace(",", ""))
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount '{value}'")
    if not amount.is_finite():
        raise argparse.ArgumentTypeError(f"invalid amount '{value}'")
    return amount


def add_transaction_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments common to `incomes add` and `payments add`."""
    parser.add_argument("description", help="What the transaction is for")
    parser.add_argument("amount", type=amount_arg, help="Positive amount")
    parser.add_argument("date", type=date_arg, help="Date (YYYY-MM-DD); first occurrence if recurring")
    parser.add_argument(
        "--frequency",
        choices=FREQUENCIES,
        help="Make the transaction recurring with this frequency",
    )
    parser.add_argument(
        "--frequency-day",
        type=int,
        help="Weekday (0=Sunday..6=Saturday) or day of month (1-31) override",
    )
    parser.add_argument("--account-id", type=int, help="Account the transaction belongs to")


def add_payment_arguments(parser: argparse.ArgumentParser) -> None:
    """Payment-only arguments for `payments add`."""
    parser.add_argument("--category-id", type=int, help="Category of the payment")
    parser.add_argument("--end-date", type=date_arg, help="Last date a recurring payment applies")
    parser.add_argument("--payment-type", choices=PAYMENT_TYPES, help="How the payment is made")


def confirm(prompt: str, assume_yes: bool = False) -> bool:
    """Ask for a yes/no confirmation on stdin."""
    if assume_yes:
        return True
    return input(f"{prompt} (yes/no): ").strip().lower() == "yes"

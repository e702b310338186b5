#!/usr/bin/env python3

import sys
from cli.arguments import add_payment_arguments, add_transaction_arguments, confirm
from cli.incomes import describe_recurrence
from logger import get_logger
from models.transaction import Payment
from tools.business_days import DIRECTIONS, NEXT, adjust_date, load_holiday_calendar
from tools.formatting import format_date, format_money

logger = get_logger()


def cmd_list(args, services):
    """List all payments, newest first."""
    settings = services.settings.get()
    payments = services.payments.find_all()

    if not payments:
        logger.info("No payments found.")
        return

    logger.info("\nPayments:")
    logger.info("=" * 80)
    for payment in payments:
        when = format_date(payment.date, settings.date_format) if payment.date else "invalid date"
        line = (
            f"{payment.id:>5}  {when:<12} {format_money(payment.amount, settings.currency):>14}  "
            f"{payment.description}  [{describe_recurrence(payment)}]"
        )
        if payment.end_date:
            line += f" until {format_date(payment.end_date, settings.date_format)}"
        if payment.category_name:
            line += f"  #{payment.category_name}"
        if payment.account_name:
            line += f"  @ {payment.account_name}"
        logger.info(line)

    logger.info(f"\nTotal payments: {len(payments)}")


def cmd_add(args, services):
    """Record a new payment, optionally moving it off weekends/holidays."""
    payment_date = args.date
    if args.adjust_weekends or args.adjust_holidays:
        holidays = load_holiday_calendar(services.config) if args.adjust_holidays else None
        payment_date = adjust_date(
            payment_date,
            args.adjust_weekends,
            args.adjust_holidays,
            args.adjust_direction,
            holidays,
        )
        if payment_date != args.date:
            logger.info(
                f"Date adjusted from {args.date.isoformat()} to {payment_date.isoformat()}"
            )

    payment = Payment(
        id=None,
        description=args.description,
        amount=args.amount,
        date=payment_date,
        recurring=args.frequency is not None,
        frequency=args.frequency,
        frequency_day=args.frequency_day,
        account_id=args.account_id,
        category_id=args.category_id,
        end_date=args.end_date,
        payment_type=args.payment_type,
    )

    try:
        payment = services.payments.create(payment)
    except Exception as e:
        logger.error(f"Error creating payment: {e}")
        sys.exit(1)

    logger.info(f"✓ Payment created with ID: {payment.id} ({describe_recurrence(payment)})")


def cmd_delete(args, services):
    """Delete a payment by ID."""
    payment = services.payments.find(args.payment_id)
    if not payment:
        logger.error(f"Payment with ID {args.payment_id} not found.")
        sys.exit(1)

    logger.info(f"\nPayment to delete: {payment.description} ({payment.amount})")
    if not confirm("Are you sure you want to delete this payment?", args.yes):
        logger.info("Deletion cancelled.")
        return

    if services.payments.delete(payment.id):
        logger.info("✓ Payment deleted successfully.")
    else:
        logger.error("Failed to delete payment.")
        sys.exit(1)


def setup_parser(subparsers):
    """Setup payments subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "payments",
        help="Manage payments",
        description="Record, list and delete one-time and recurring payments",
    )

    payments_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available payment commands",
        dest="subcommand",
        required=True,
    )

    list_parser = payments_subparsers.add_parser("list", help="List all payments")
    list_parser.set_defaults(func=cmd_list)

    add_parser = payments_subparsers.add_parser("add", help="Record a new payment")
    add_transaction_arguments(add_parser)
    add_payment_arguments(add_parser)
    add_parser.add_argument(
        "--adjust-weekends",
        action="store_true",
        help="Move a weekend date to a working day",
    )
    add_parser.add_argument(
        "--adjust-holidays",
        action="store_true",
        help="Move a bank holiday date to a working day",
    )
    add_parser.add_argument(
        "--adjust-direction",
        choices=DIRECTIONS,
        default=NEXT,
        help="Direction to move an adjusted date (default: next)",
    )
    add_parser.set_defaults(func=cmd_add)

    delete_parser = payments_subparsers.add_parser("delete", help="Delete a payment by ID")
    delete_parser.add_argument("payment_id", type=int, help="ID of the payment to delete")
    delete_parser.add_argument("--yes", action="store_true", help="Skip confirmation")
    delete_parser.set_defaults(func=cmd_delete)

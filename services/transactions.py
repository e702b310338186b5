"""Shared validation and row parsing for income and payment services."""

import dataclasses
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from logger import get_logger
from models.transaction import (
    FREQUENCIES,
    MONTHLY,
    WEEKDAY_FREQUENCIES,
    Transaction,
)

logger = get_logger()


def parse_date(value) -> Optional[date]:
    """Parse a stored ISO date, returning None for missing or invalid values.

    A single malformed row should not make the whole table unreadable, so
    parse failures are logged and swallowed here.
    """
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        logger.warning(f"Ignoring unparseable date value: {value!r}")
        return None


def parse_amount(value) -> Decimal:
    """Convert a stored REAL amount to Decimal without float artefacts."""
    if value is None:
        return Decimal("NaN")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return Decimal("NaN")


class RecurringTransactionService:
    """Common behaviour for services that store (possibly recurring) transactions."""

    def __init__(self, db_manager):
        """Initialize the service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def normalize(self, transaction: Transaction) -> Transaction:
        """Validate a transaction and return a copy ready for storage.

        Recurring transactions without a frequency are stored as monthly.
        Non-recurring transactions have their recurrence fields cleared.

        Raises:
            ValueError: If any field is invalid.
        """
        if not transaction.description or not transaction.description.strip():
            raise ValueError("description cannot be empty")

        try:
            amount = Decimal(str(transaction.amount))
        except InvalidOperation:
            raise ValueError(f"amount must be a number, got {transaction.amount!r}")
        if amount.is_nan() or amount <= 0:
            raise ValueError(f"amount must be positive, got {transaction.amount}")

        if transaction.date is None:
            raise ValueError("date is required")

        if not transaction.recurring:
            return dataclasses.replace(
                transaction,
                description=transaction.description.strip(),
                amount=amount,
                frequency=None,
                frequency_day=None,
            )

        frequency = transaction.frequency or MONTHLY
        if frequency not in FREQUENCIES:
            raise ValueError(
                f"Unsupported frequency '{frequency}'. "
                f"Must be one of: {', '.join(FREQUENCIES)}"
            )

        frequency_day = transaction.frequency_day
        if frequency_day is not None:
            if frequency in WEEKDAY_FREQUENCIES and not 0 <= frequency_day <= 6:
                raise ValueError(
                    f"frequency_day for {frequency} must be 0-6 (Sunday-Saturday)"
                )
            if frequency == MONTHLY and not 1 <= frequency_day <= 31:
                raise ValueError("frequency_day for monthly must be 1-31")

        return dataclasses.replace(
            transaction,
            description=transaction.description.strip(),
            amount=amount,
            frequency=frequency,
            frequency_day=frequency_day,
        )

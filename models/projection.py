"""Projection output models: occurrences, periods and summaries."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional


@dataclass(frozen=True)
class Occurrence:
    """One dated instance of a transaction's contribution within a period.

    Attributes:
        source_transaction_id: ID of the income or payment it came from.
        description: Label copied from the source transaction.
        amount: Contribution of this single occurrence.
        occurrence_date: Calendar date of the occurrence.
        is_recurring_instance: True when generated by recurrence expansion.
    """

    source_transaction_id: Optional[int]
    description: str
    amount: Decimal
    occurrence_date: date
    is_recurring_instance: bool


@dataclass
class Period:
    """One unit of the projection grid.

    Attributes:
        label: Display label, e.g. "Jan 2024" or "Jan 1, 2024".
        period_start: First day of the period (inclusive).
        period_end: Day after the last day of the period (exclusive).
        income: Total income in the period, rounded to cents.
        expenses: Total expenses in the period, rounded to cents.
        net_change: income - expenses, rounded to cents.
        running_balance: Start balance plus all net changes up to and
                         including this period, rounded to cents.
        income_occurrences: Contributing income occurrences.
        expense_occurrences: Contributing payment occurrences.
    """

    label: str
    period_start: date
    period_end: date
    income: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")
    net_change: Decimal = Decimal("0")
    running_balance: Decimal = Decimal("0")
    income_occurrences: List[Occurrence] = field(default_factory=list)
    expense_occurrences: List[Occurrence] = field(default_factory=list)

    def contains(self, day: date) -> bool:
        """Check whether a date falls within [period_start, period_end)."""
        return self.period_start <= day < self.period_end


@dataclass(frozen=True)
class ProjectionSummary:
    """Summary-card figures for a sequence of periods."""

    total_income: Decimal
    total_expenses: Decimal
    net_balance: Decimal
    start_balance: Decimal
    end_balance: Decimal

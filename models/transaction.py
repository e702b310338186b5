from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

WEEKLY = "weekly"
FORTNIGHTLY = "fortnightly"
FOUR_WEEKLY = "four-weekly"
MONTHLY = "monthly"
ANNUALLY = "annually"

FREQUENCIES = (WEEKLY, FORTNIGHTLY, FOUR_WEEKLY, MONTHLY, ANNUALLY)

# Frequencies whose frequency_day is a day of the week (0=Sunday..6=Saturday)
WEEKDAY_FREQUENCIES = (WEEKLY, FORTNIGHTLY, FOUR_WEEKLY)

PAYMENT_TYPES = ("cash", "direct_debit", "standing_order", "card")


@dataclass
class Transaction:
    id: Optional[int]  # assigned by the store
    description: str
    amount: Decimal  # always positive
    date: Optional[date]  # None when the stored value could not be parsed
    recurring: bool = False
    frequency: Optional[str] = None
    frequency_day: Optional[int] = None  # weekday (0=Sunday) or day of month
    account_id: Optional[int] = None  # None applies to every account
    account_name: Optional[str] = None  # read-only, joined from accounts

    def to_dict(self) -> dict:
        """Convert transaction to dictionary for database storage."""
        return {
            "id": self.id,
            "description": self.description,
            "amount": float(self.amount),
            "date": self.date.isoformat() if self.date else None,
            "recurring": 1 if self.recurring else 0,
            "frequency": self.frequency,
            "frequency_day": self.frequency_day,
            "account_id": self.account_id,
        }


@dataclass
class Income(Transaction):
    """Money coming in. Recurring incomes never end."""


@dataclass
class Payment(Transaction):
    """Money going out, optionally categorized and end-dated."""

    category_id: Optional[int] = None
    end_date: Optional[date] = None  # recurring payments stop after this date
    payment_type: Optional[str] = None  # informational only
    category_name: Optional[str] = None  # read-only, joined from categories
    category_color: Optional[str] = None  # read-only, joined from categories

    def to_dict(self) -> dict:
        """Convert payment to dictionary for database storage."""
        data = super().to_dict()
        data.update(
            {
                "category_id": self.category_id,
                "end_date": self.end_date.isoformat() if self.end_date else None,
                "payment_type": self.payment_type,
            }
        )
        return data

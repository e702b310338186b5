from dataclasses import dataclass
from decimal import Decimal


@dataclass
class Account:
    id: int
    name: str  # e.g., "Joint Current Account"
    description: str
    balance: Decimal  # stored reference balance, not derived from transactions
    currency: str = "USD"
    active: bool = True

    def to_dict(self) -> dict:
        """Convert account to dictionary for database storage."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "balance": float(self.balance),
            "currency": self.currency,
            "active": 1 if self.active else 0,
        }

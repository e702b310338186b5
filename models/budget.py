"""BudgetSnapshot model: the combined read the projector consumes."""

from dataclasses import dataclass, field
from typing import List

from models.account import Account
from models.category import Category
from models.settings import Settings
from models.transaction import Income, Payment


@dataclass
class BudgetSnapshot:
    """Point-in-time view of everything the dashboard and forecast need.

    Attributes:
        settings: The singleton settings record.
        incomes: All incomes, with account names resolved.
        payments: All payments, with category and account names resolved.
        categories: All categories, enabled or not.
        accounts: Active accounts only.
    """

    settings: Settings
    incomes: List[Income] = field(default_factory=list)
    payments: List[Payment] = field(default_factory=list)
    categories: List[Category] = field(default_factory=list)
    accounts: List[Account] = field(default_factory=list)

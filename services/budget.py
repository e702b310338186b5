"""Budget read model: assembles the combined snapshot in one connection."""

from models.budget import BudgetSnapshot


class BudgetService:
    """Read-only service that builds a BudgetSnapshot.

    Args:
        services: Services container whose store services do the row mapping.
    """

    def __init__(self, db_manager, services):
        self.db_manager = db_manager
        self.services = services

    def snapshot(self) -> BudgetSnapshot:
        """Load settings, incomes, payments, categories and active accounts.

        Returns:
            BudgetSnapshot with display fields (account and category names)
            already resolved.
        """
        with self.db_manager.connect() as conn:
            settings = self.services.settings.get(conn=conn)
            incomes = self.services.incomes.find_all(conn=conn)
            payments = self.services.payments.find_all(conn=conn)

        return BudgetSnapshot(
            settings=settings,
            incomes=incomes,
            payments=payments,
            categories=self.services.categories.find_all(),
            accounts=self.services.accounts.find_all(active_only=True),
        )

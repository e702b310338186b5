"""Base services container for dependency injection."""

from config import Config
from db.manager import DatabaseManager


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject mock services for testing.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If provided, config is ignored.
    """

    def __init__(self, config: Config, db_manager=None):
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)

        # Lazy import to avoid circular dependencies
        from services.accounts import AccountService
        from services.budget import BudgetService
        from services.categories import CategoryService
        from services.incomes import IncomeService
        from services.payments import PaymentService
        from services.settings import SettingsService

        self.accounts = AccountService(self.db_manager)
        self.categories = CategoryService(self.db_manager)
        self.incomes = IncomeService(self.db_manager)
        self.payments = PaymentService(self.db_manager)
        self.settings = SettingsService(self.db_manager)
        self.budget = BudgetService(self.db_manager, self)

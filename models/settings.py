"""Settings model for the singleton settings record."""

from dataclasses import dataclass, field
from decimal import Decimal

DEFAULT_CURRENCY = "USD"
DEFAULT_DATE_FORMAT = "MM/DD/YYYY"


@dataclass
class Settings:
    """User-level preferences.

    Attributes:
        currency: ISO currency code used for display.
        start_balance: Balance at the epoch of all projections.
        date_format: Display format such as "MM/DD/YYYY".
        enable_notifications: Display toggle.
        show_balance_in_header: Display toggle.
    """

    currency: str = DEFAULT_CURRENCY
    start_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    date_format: str = DEFAULT_DATE_FORMAT
    enable_notifications: bool = False
    show_balance_in_header: bool = False

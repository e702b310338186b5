"""Settings service for the singleton settings record."""

from decimal import Decimal
from typing import Optional

from logger import get_logger
from models.settings import DEFAULT_CURRENCY, DEFAULT_DATE_FORMAT, Settings
from services.transactions import parse_amount

logger = get_logger()

_SETTINGS_SELECT = """
    SELECT currency, start_balance, date_format, enable_notifications,
           show_balance_in_header
    FROM settings WHERE id = 1
"""


class SettingsService:
    """Service for reading and updating the settings singleton.

    The settings table holds exactly one row (id = 1). The initial migration
    inserts it; get() recreates it with defaults if it has gone missing.
    """

    def __init__(self, db_manager):
        self.db_manager = db_manager

    def get(self, conn=None) -> Settings:
        """Get the current settings.

        Args:
            conn: Optional open connection, used by the budget read model.

        Returns:
            The Settings singleton.
        """
        if conn is not None:
            return self._get(conn)

        with self.db_manager.connect() as conn:
            return self._get(conn)

    def update(
        self,
        currency: str,
        start_balance: Decimal,
        date_format: Optional[str] = None,
        enable_notifications: bool = False,
        show_balance_in_header: bool = False,
    ) -> Settings:
        """Replace the settings.

        Args:
            currency: ISO currency code (required).
            start_balance: Balance at the epoch of all projections.
            date_format: Display format; defaults to MM/DD/YYYY when empty.
            enable_notifications: Display toggle.
            show_balance_in_header: Display toggle.

        Returns:
            The updated Settings.

        Raises:
            ValueError: If currency is empty.
        """
        if not currency or not currency.strip():
            raise ValueError("Currency is required")

        with self.db_manager.connect() as conn:
            self._ensure_row(conn)
            conn.execute(
                """
                UPDATE settings
                SET currency = ?, start_balance = ?, date_format = ?,
                    enable_notifications = ?, show_balance_in_header = ?
                WHERE id = 1
                """,
                (
                    currency.strip().upper(),
                    float(start_balance or 0),
                    date_format or DEFAULT_DATE_FORMAT,
                    1 if enable_notifications else 0,
                    1 if show_balance_in_header else 0,
                ),
            )
            conn.commit()
            return self._get(conn)

    def _get(self, conn) -> Settings:
        row = conn.execute(_SETTINGS_SELECT).fetchone()
        if row is None:
            self._ensure_row(conn)
            row = conn.execute(_SETTINGS_SELECT).fetchone()

        return Settings(
            currency=row[0],
            start_balance=parse_amount(row[1]),
            date_format=row[2] or DEFAULT_DATE_FORMAT,
            enable_notifications=bool(row[3]),
            show_balance_in_header=bool(row[4]),
        )

    def _ensure_row(self, conn) -> None:
        cursor = conn.execute(
            """
            INSERT OR IGNORE INTO settings (id, currency, start_balance, date_format)
            VALUES (1, ?, 0.0, ?)
            """,
            (DEFAULT_CURRENCY, DEFAULT_DATE_FORMAT),
        )
        if cursor.rowcount:
            logger.warning("Settings row was missing; recreated with defaults")
            conn.commit()

"""Account service for database operations."""

from decimal import Decimal
from typing import List, Optional
from models.account import Account

_ACCOUNT_SELECT_FIELDS = "id, name, description, balance, currency, active"


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db_manager):
        """Initialize the account service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self, active_only: bool = False) -> List[Account]:
        """Get all accounts from the database.

        Args:
            active_only: If True, skip inactive accounts.

        Returns:
            List of Account objects, ordered by name.
        """
        query = f"SELECT {_ACCOUNT_SELECT_FIELDS} FROM accounts"
        if active_only:
            query += " WHERE active = 1"
        query += " ORDER BY name"

        with self.db_manager.connect() as conn:
            rows = conn.execute(query).fetchall()
            return [self._row_to_account(row) for row in rows]

    def find(self, account_id: int) -> Optional[Account]:
        """Get a single account by ID.

        Args:
            account_id: The account ID to find.

        Returns:
            Account object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_ACCOUNT_SELECT_FIELDS} FROM accounts WHERE id = ?",
                (account_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_account(row)
            return None

    def find_by_name(self, name: str) -> Optional[Account]:
        """Get a single account by name.

        Args:
            name: The account name to find.

        Returns:
            Account object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_ACCOUNT_SELECT_FIELDS} FROM accounts WHERE name = ?",
                (name,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_account(row)
            return None

    def create(
        self,
        name: str,
        description: Optional[str] = None,
        balance: Decimal = Decimal("0"),
        currency: str = "USD",
    ) -> Account:
        """Create a new, active account.

        Args:
            name: Account name (should be unique).
            description: Human-readable description.
            balance: Stored reference balance.
            currency: ISO currency code.

        Returns:
            The created Account object with id populated.

        Raises:
            sqlite3.IntegrityError: If the name is already taken.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO accounts (name, description, balance, currency, active)
                VALUES (?, ?, ?, ?, 1)
                """,
                (name, description, float(balance), currency),
            )
            conn.commit()

            return Account(
                id=cursor.lastrowid,
                name=name,
                description=description,
                balance=Decimal(str(balance)),
                currency=currency,
                active=True,
            )

    def update(
        self,
        account_id: int,
        name: str,
        description: Optional[str],
        balance: Decimal,
        currency: str,
        active: bool,
    ) -> Account:
        """Update an existing account.

        Returns:
            The updated Account object.

        Raises:
            Exception: If account not found or update fails.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                UPDATE accounts
                SET name = ?, description = ?, balance = ?, currency = ?, active = ?
                WHERE id = ?
                """,
                (
                    name,
                    description,
                    float(balance),
                    currency,
                    1 if active else 0,
                    account_id,
                ),
            )
            conn.commit()

            if cursor.rowcount == 0:
                raise Exception(f"Account with ID {account_id} not found")

            return Account(
                id=account_id,
                name=name,
                description=description,
                balance=Decimal(str(balance)),
                currency=currency,
                active=active,
            )

    def delete(self, account_id: int) -> bool:
        """Delete an account by ID.

        Incomes and payments that referenced the account are kept; their
        account reference is cleared.

        Args:
            account_id: The account ID to delete.

        Returns:
            True if account was deleted, False if not found.
        """
        with self.db_manager.connect() as conn:
            conn.execute(
                "UPDATE incomes SET account_id = NULL WHERE account_id = ?",
                (account_id,),
            )
            conn.execute(
                "UPDATE payments SET account_id = NULL WHERE account_id = ?",
                (account_id,),
            )
            cursor = conn.execute("DELETE FROM accounts WHERE id = ?", (account_id,))
            conn.commit()
            return cursor.rowcount > 0

    def _row_to_account(self, row: tuple) -> Account:
        """Convert a database row to an Account object."""
        return Account(
            id=row[0],
            name=row[1],
            description=row[2],
            balance=Decimal(str(row[3])),
            currency=row[4],
            active=bool(row[5]),
        )

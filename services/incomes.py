"""Income service for database operations."""

from typing import List, Optional

from models.transaction import Income
from services.transactions import RecurringTransactionService, parse_amount, parse_date

_INCOME_SELECT = """
    SELECT i.id, i.description, i.amount, i.date, i.recurring, i.frequency,
           i.frequency_day, i.account_id, a.name
    FROM incomes i
    LEFT JOIN accounts a ON i.account_id = a.id
"""


class IncomeService(RecurringTransactionService):
    """Service for managing incomes."""

    def find_all(self, conn=None) -> List[Income]:
        """Get all incomes with their account names.

        Args:
            conn: Optional open connection, used by the budget read model to
                  assemble a snapshot in a single connection.

        Returns:
            List of Income objects ordered by date (newest first).
        """
        query = _INCOME_SELECT + " ORDER BY i.date DESC, i.id"
        if conn is not None:
            return [self._row_to_income(row) for row in conn.execute(query)]

        with self.db_manager.connect() as conn:
            rows = conn.execute(query).fetchall()
            return [self._row_to_income(row) for row in rows]

    def find(self, income_id: int) -> Optional[Income]:
        """Get a single income by ID.

        Returns:
            Income object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(_INCOME_SELECT + " WHERE i.id = ?", (income_id,))
            row = cursor.fetchone()

            if row:
                return self._row_to_income(row)
            return None

    def create(self, income: Income) -> Income:
        """Create a new income.

        Args:
            income: Income to insert. Its id is ignored.

        Returns:
            The stored Income with id populated.

        Raises:
            ValueError: If the income fails validation.
            sqlite3.IntegrityError: If account_id references a missing account.
        """
        income = self.normalize(income)
        data = income.to_dict()

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO incomes
                    (description, amount, date, recurring, frequency, frequency_day, account_id)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data["description"],
                    data["amount"],
                    data["date"],
                    data["recurring"],
                    data["frequency"],
                    data["frequency_day"],
                    data["account_id"],
                ),
            )
            conn.commit()
            income_id = cursor.lastrowid

        return self.find(income_id)

    def update(self, income: Income) -> Income:
        """Replace all editable fields of an existing income.

        Raises:
            ValueError: If the income fails validation.
            Exception: If income not found.
        """
        income = self.normalize(income)
        data = income.to_dict()

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                UPDATE incomes
                SET description = ?, amount = ?, date = ?, recurring = ?,
                    frequency = ?, frequency_day = ?, account_id = ?
                WHERE id = ?
                """,
                (
                    data["description"],
                    data["amount"],
                    data["date"],
                    data["recurring"],
                    data["frequency"],
                    data["frequency_day"],
                    data["account_id"],
                    income.id,
                ),
            )
            conn.commit()

            if cursor.rowcount == 0:
                raise Exception(f"Income with ID {income.id} not found")

        return self.find(income.id)

    def delete(self, income_id: int) -> bool:
        """Delete an income by ID.

        Returns:
            True if income was deleted, False if not found.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM incomes WHERE id = ?", (income_id,))
            conn.commit()
            return cursor.rowcount > 0

    def _row_to_income(self, row: tuple) -> Income:
        """Convert a database row to an Income object."""
        return Income(
            id=row[0],
            description=row[1],
            amount=parse_amount(row[2]),
            date=parse_date(row[3]),
            recurring=bool(row[4]),
            frequency=row[5],
            frequency_day=row[6],
            account_id=row[7],
            account_name=row[8],
        )

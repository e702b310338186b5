"""Payment service for database operations."""

from typing import List, Optional

from models.transaction import PAYMENT_TYPES, Payment
from services.transactions import RecurringTransactionService, parse_amount, parse_date

_PAYMENT_SELECT = """
    SELECT p.id, p.description, p.amount, p.date, p.recurring, p.frequency,
           p.frequency_day, p.account_id, a.name,
           p.category_id, p.end_date, p.payment_type, c.name, c.color
    FROM payments p
    LEFT JOIN categories c ON p.category_id = c.id
    LEFT JOIN accounts a ON p.account_id = a.id
"""

_PAYMENT_WRITE_FIELDS = (
    "description",
    "amount",
    "date",
    "recurring",
    "frequency",
    "frequency_day",
    "account_id",
    "category_id",
    "end_date",
    "payment_type",
)


class PaymentService(RecurringTransactionService):
    """Service for managing payments."""

    def normalize(self, payment: Payment) -> Payment:
        """Validate a payment and return a copy ready for storage.

        Adds payment-specific checks on top of the shared ones: payment_type
        must be a known type and end_date cannot precede date. One-off
        payments never carry an end date.

        Raises:
            ValueError: If any field is invalid.
        """
        payment = super().normalize(payment)

        if payment.payment_type is not None and payment.payment_type not in PAYMENT_TYPES:
            raise ValueError(
                f"Unsupported payment type '{payment.payment_type}'. "
                f"Must be one of: {', '.join(PAYMENT_TYPES)}"
            )

        if not payment.recurring:
            payment.end_date = None
        elif payment.end_date is not None and payment.end_date < payment.date:
            raise ValueError("end_date cannot be before date")

        return payment

    def find_all(self, conn=None) -> List[Payment]:
        """Get all payments with their category and account display fields.

        Args:
            conn: Optional open connection, used by the budget read model.

        Returns:
            List of Payment objects ordered by date (newest first).
        """
        query = _PAYMENT_SELECT + " ORDER BY p.date DESC, p.id"
        if conn is not None:
            return [self._row_to_payment(row) for row in conn.execute(query)]

        with self.db_manager.connect() as conn:
            rows = conn.execute(query).fetchall()
            return [self._row_to_payment(row) for row in rows]

    def find_by_category(self, category_id: Optional[int]) -> List[Payment]:
        """Get payments in a category, or uncategorized ones when category_id is None."""
        if category_id is None:
            where, params = " WHERE p.category_id IS NULL", ()
        else:
            where, params = " WHERE p.category_id = ?", (category_id,)

        with self.db_manager.connect() as conn:
            rows = conn.execute(
                _PAYMENT_SELECT + where + " ORDER BY p.date DESC, p.id", params
            ).fetchall()
            return [self._row_to_payment(row) for row in rows]

    def find(self, payment_id: int) -> Optional[Payment]:
        """Get a single payment by ID.

        Returns:
            Payment object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(_PAYMENT_SELECT + " WHERE p.id = ?", (payment_id,))
            row = cursor.fetchone()

            if row:
                return self._row_to_payment(row)
            return None

    def create(self, payment: Payment) -> Payment:
        """Create a new payment.

        Args:
            payment: Payment to insert. Its id is ignored.

        Returns:
            The stored Payment with id and display fields populated.

        Raises:
            ValueError: If the payment fails validation.
            sqlite3.IntegrityError: If a referenced account or category is missing.
        """
        data = self.normalize(payment).to_dict()
        placeholders = ", ".join(["?"] * len(_PAYMENT_WRITE_FIELDS))

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"INSERT INTO payments ({', '.join(_PAYMENT_WRITE_FIELDS)}) "
                f"VALUES ({placeholders})",
                tuple(data[field] for field in _PAYMENT_WRITE_FIELDS),
            )
            conn.commit()
            payment_id = cursor.lastrowid

        return self.find(payment_id)

    def update(self, payment: Payment) -> Payment:
        """Replace all editable fields of an existing payment.

        Raises:
            ValueError: If the payment fails validation.
            Exception: If payment not found.
        """
        data = self.normalize(payment).to_dict()
        set_clause = ", ".join(f"{field} = ?" for field in _PAYMENT_WRITE_FIELDS)

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"UPDATE payments SET {set_clause} WHERE id = ?",
                tuple(data[field] for field in _PAYMENT_WRITE_FIELDS) + (payment.id,),
            )
            conn.commit()

            if cursor.rowcount == 0:
                raise Exception(f"Payment with ID {payment.id} not found")

        return self.find(payment.id)

    def delete(self, payment_id: int) -> bool:
        """Delete a payment by ID.

        Returns:
            True if payment was deleted, False if not found.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM payments WHERE id = ?", (payment_id,))
            conn.commit()
            return cursor.rowcount > 0

    def _row_to_payment(self, row: tuple) -> Payment:
        """Convert a database row to a Payment object."""
        return Payment(
            id=row[0],
            description=row[1],
            amount=parse_amount(row[2]),
            date=parse_date(row[3]),
            recurring=bool(row[4]),
            frequency=row[5],
            frequency_day=row[6],
            account_id=row[7],
            account_name=row[8],
            category_id=row[9],
            end_date=parse_date(row[10]),
            payment_type=row[11],
            category_name=row[12],
            category_color=row[13],
        )

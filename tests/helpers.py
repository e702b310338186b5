"""Helper utilities for tests."""

from datetime import date
from decimal import Decimal
from pathlib import Path
import sqlite3

from models.transaction import Income, Payment


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    for migration_file in sorted(migrations_dir.glob("*.sql")):
        conn.executescript(migration_file.read_text())

    conn.commit()


def make_income(
    amount="100.00",
    day=date(2024, 1, 1),
    description="Salary",
    id=1,
    **kwargs,
) -> Income:
    """Build an Income with sensible defaults for projector tests."""
    return Income(
        id=id,
        description=description,
        amount=Decimal(str(amount)),
        date=day,
        **kwargs,
    )


def make_payment(
    amount="100.00",
    day=date(2024, 1, 1),
    description="Rent",
    id=1,
    **kwargs,
) -> Payment:
    """Build a Payment with sensible defaults for projector tests."""
    return Payment(
        id=id,
        description=description,
        amount=Decimal(str(amount)),
        date=day,
        **kwargs,
    )

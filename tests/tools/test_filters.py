"""Tests for account filtering."""

from decimal import Decimal

from models.account import Account
from models.budget import BudgetSnapshot
from models.settings import Settings
from tests.helpers import make_income, make_payment
from tools.filters import active_account_ids, filter_by_accounts, filter_snapshot


class TestFilterByAccounts:
    """Tests for filter_by_accounts function."""

    def test_no_filter(self):
        """Test that None keeps every transaction."""
        incomes = [make_income(id=1, account_id=1), make_income(id=2, account_id=2)]

        assert filter_by_accounts(incomes, None) == incomes

    def test_keeps_selected_and_unassigned(self):
        """Test that unassigned transactions apply to any selection."""
        incomes = [
            make_income(id=1, account_id=1),
            make_income(id=2, account_id=2),
            make_income(id=3, account_id=None),
        ]

        result = filter_by_accounts(incomes, [1])

        assert [i.id for i in result] == [1, 3]

    def test_empty_selection(self):
        """Test that an empty selection keeps only unassigned transactions."""
        payments = [make_payment(id=1, account_id=1), make_payment(id=2)]

        assert [p.id for p in filter_by_accounts(payments, [])] == [2]

    def test_returns_new_list(self):
        """Test that the input list is not modified."""
        incomes = [make_income(id=1, account_id=1), make_income(id=2, account_id=2)]

        filter_by_accounts(incomes, [2])

        assert len(incomes) == 2


class TestAccountSelection:
    """Tests for active_account_ids and filter_snapshot."""

    def test_active_account_ids(self):
        """Test that inactive accounts are not selected by default."""
        accounts = [
            Account(id=1, name="Current", description="", balance=Decimal("0")),
            Account(id=2, name="Old", description="", balance=Decimal("0"), active=False),
        ]

        assert active_account_ids(accounts) == [1]

    def test_filter_snapshot(self):
        """Test filtering both incomes and payments of a snapshot."""
        snapshot = BudgetSnapshot(
            settings=Settings(),
            incomes=[make_income(id=1, account_id=1), make_income(id=2, account_id=2)],
            payments=[make_payment(id=1, account_id=2), make_payment(id=2)],
        )

        filtered = filter_snapshot(snapshot, [1])

        assert [i.id for i in filtered.incomes] == [1]
        assert [p.id for p in filtered.payments] == [2]
        assert len(snapshot.incomes) == 2

    def test_filter_snapshot_none(self):
        """Test that no selection returns the snapshot unchanged."""
        snapshot = BudgetSnapshot(settings=Settings(), incomes=[make_income()])

        assert filter_snapshot(snapshot, None) is snapshot

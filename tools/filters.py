"""Account pre-filtering applied before projection."""

import dataclasses
from typing import Iterable, List, Optional

from models.account import Account
from models.budget import BudgetSnapshot


def applies_to_accounts(transaction, account_ids: Optional[Iterable[int]]) -> bool:
    """A transaction with no account applies to every account selection."""
    if account_ids is None or transaction.account_id is None:
        return True
    return transaction.account_id in account_ids


def filter_by_accounts(transactions: Iterable, account_ids: Optional[Iterable[int]]) -> List:
    """Keep transactions that belong to one of account_ids or to no account.

    Args:
        transactions: Incomes or payments.
        account_ids: Allowed account IDs; None disables filtering.

    Returns:
        A new list; the input is not modified.
    """
    allowed = set(account_ids) if account_ids is not None else None
    return [t for t in transactions if applies_to_accounts(t, allowed)]


def active_account_ids(accounts: Iterable[Account]) -> List[int]:
    """IDs of active accounts: the default selection for filters."""
    return [account.id for account in accounts if account.active]


def filter_snapshot(
    snapshot: BudgetSnapshot, account_ids: Optional[Iterable[int]]
) -> BudgetSnapshot:
    """Apply filter_by_accounts to a snapshot's incomes and payments."""
    if account_ids is None:
        return snapshot
    allowed = set(account_ids)
    return dataclasses.replace(
        snapshot,
        incomes=filter_by_accounts(snapshot.incomes, allowed),
        payments=filter_by_accounts(snapshot.payments, allowed),
    )

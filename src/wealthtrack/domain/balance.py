"""Ledger balance calculation."""

import logging
from decimal import Decimal
from typing import Iterable

from wealthtrack.database.base import Database
from wealthtrack.domain.currency import round_currency
from wealthtrack.domain.entities import AccountBalance, EntryType, LedgerEntry
from wealthtrack.domain.errors import NotFoundError, account_not_found

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def signed_amount(entry: LedgerEntry) -> Decimal:
    """Return the entry amount signed by its direction."""
    if entry.type == EntryType.INFLOW:
        return entry.amount
    return -entry.amount


def calculate_balance(initial_balance: Decimal, entries: Iterable[LedgerEntry]) -> Decimal:
    """Compute ``initial_balance + sum(inflows) - sum(outflows)``.

    Args:
        initial_balance: Opening balance of the account
        entries: Ledger entries of the account, in any order

    Returns:
        Unrounded balance in the account currency
    """
    return initial_balance + sum((signed_amount(e) for e in entries), ZERO)


def calculate_credit_owed(limit: Decimal, balance: Decimal) -> Decimal:
    """Amount owed on a credit account.

    ``initial_balance`` stores the credit limit and the balance is the
    available credit, so the owed amount is their difference. A card paid
    beyond its limit owes nothing; the surplus is not reported as negative
    debt.
    """
    owed = limit - balance
    return owed if owed > ZERO else ZERO


class BalanceService:
    """Service for account balances."""

    def __init__(self, db: Database):
        """Initialize balance service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_account_balance(self, account_id: int) -> AccountBalance:
        """Get the current balance of an account.

        Raises:
            NotFoundError: If the account does not exist
        """
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))

        entries = self.db.list_entries(account_id=account_id)
        balance = calculate_balance(account.initial_balance, entries)
        logger.debug("Account %s balance %s over %d entries", account_id, balance, len(entries))
        return AccountBalance(
            account_id=account.id,
            balance=round_currency(balance),
            currency=account.currency,
            type=account.type,
        )

    def list_account_balances(self) -> list[AccountBalance]:
        """Get balances for all accounts."""
        entries_by_account = group_entries_by_account(self.db.list_entries())
        return [
            AccountBalance(
                account_id=account.id,
                balance=round_currency(
                    calculate_balance(
                        account.initial_balance, entries_by_account.get(account.id, [])
                    )
                ),
                currency=account.currency,
                type=account.type,
            )
            for account in self.db.list_accounts()
        ]


def group_entries_by_account(entries: Iterable[LedgerEntry]) -> dict[int, list[LedgerEntry]]:
    """Group ledger entries by account ID."""
    grouped: dict[int, list[LedgerEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.account_id, []).append(entry)
    return grouped

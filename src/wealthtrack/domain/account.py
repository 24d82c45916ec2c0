"""Account domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from wealthtrack.database.base import Database
from wealthtrack.domain.entities import Account as AccountEntity
from wealthtrack.domain.entities import AccountType, EntryType, LedgerEntry
from wealthtrack.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    account_delete_blocked,
    account_not_found,
    entry_linked_to_transfer,
    entry_not_found,
)
from wealthtrack.domain.settings import validate_currency_code


class AccountService:
    """Service for managing accounts and their ledger entries."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_name_available(self, name: str, exclude_id: Optional[int] = None) -> None:
        for acc in self.db.list_accounts():
            if acc.id != exclude_id and acc.name == name:
                raise ConflictError(f"Account with name '{name}' already exists")

    def create_account(
        self,
        name: str,
        type: AccountType,
        currency: str,
        initial_balance: Decimal = Decimal("0"),
        is_favorite: bool = False,
    ) -> int:
        """Create a new account.

        Args:
            name: Account name
            type: Account type
            currency: Three-letter currency code
            initial_balance: Opening balance; the limit for credit accounts
                and the value for asset accounts
            is_favorite: Whether the account is pinned

        Returns:
            Account ID

        Raises:
            ValidationError: If the type or currency is invalid
            ConflictError: If account name already exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name is required")
        try:
            account_type = AccountType(type)
        except ValueError:
            raise ValidationError(f"Invalid account type '{type}'") from None
        code = validate_currency_code(currency)
        self._check_name_available(name)

        return self.db.create_account(
            name=name,
            type=account_type,
            currency=code,
            initial_balance=initial_balance,
            is_favorite=is_favorite,
        )

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts, favorites first."""
        return sorted(self.db.list_accounts(), key=lambda a: (not a.is_favorite, a.name))

    def rename_account(self, account_id: int, name: str) -> None:
        """Rename an account.

        Raises:
            NotFoundError: If account not found
            ConflictError: If the name is taken by another account
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        name = name.strip()
        if not name:
            raise ValidationError("Account name is required")
        self._check_name_available(name, exclude_id=account_id)
        self.db.update_account(account_id, name=name)

    def set_favorite(self, account_id: int, is_favorite: bool) -> None:
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        self.db.update_account(account_id, is_favorite=is_favorite)

    def delete_account(self, account_id: int) -> None:
        """Delete an account.

        Args:
            account_id: Account ID to delete

        Raises:
            NotFoundError: If account not found
            DependencyError: If the account has ledger entries or stock trades
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        entry_count = self.db.get_account_entry_count(account_id)
        trade_count = self.db.get_account_trade_count(account_id)
        if entry_count > 0 or trade_count > 0:
            raise DependencyError(account_delete_blocked(account_id, entry_count, trade_count))

        self.db.delete_account(account_id)

    def add_entry(
        self,
        account_id: int,
        type: EntryType,
        amount: Decimal,
        date: date,
        payee: Optional[str] = None,
        category: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Record an inflow or outflow on an account.

        Args:
            account_id: Account ID
            type: Inflow or outflow
            amount: Non-negative amount in the account currency
            date: Entry date
            payee: Optional payee
            category: Optional category
            notes: Optional notes

        Returns:
            Ledger entry ID

        Raises:
            NotFoundError: If the account does not exist
            ValidationError: If the amount is negative
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        if amount < 0:
            raise ValidationError("Amount cannot be negative")

        return self.db.create_entry(
            account_id=account_id,
            type=EntryType(type),
            amount=amount,
            date=date,
            payee=payee,
            category=category,
            notes=notes,
        )

    def list_entries(
        self,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[LedgerEntry]:
        return self.db.list_entries(
            account_id=account_id, start_date=start_date, end_date=end_date
        )

    def delete_entry(self, entry_id: int) -> None:
        """Delete a standalone ledger entry.

        Raises:
            NotFoundError: If the entry does not exist
            ValidationError: If the entry is one leg of a transfer
        """
        entry = self.db.get_entry(entry_id)
        if entry is None:
            raise NotFoundError(entry_not_found(entry_id))
        if entry.transfer_id is not None:
            raise ValidationError(entry_linked_to_transfer(entry_id, entry.transfer_id))
        self.db.delete_entry(entry_id)

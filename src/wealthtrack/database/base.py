"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from wealthtrack.domain.entities import (
    Account,
    AccountType,
    Dividend,
    EntryType,
    Frequency,
    Holding,
    LedgerEntry,
    RecurringTemplate,
    StockTransaction,
    TradeType,
    Transfer,
)


class Database(ABC):
    """Abstract database interface for wealthtrack."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        name: str,
        type: AccountType,
        currency: str,
        initial_balance: Decimal,
        is_favorite: bool = False,
    ) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts ordered by type and name."""
        pass

    @abstractmethod
    def update_account(
        self, account_id: int, name: Optional[str] = None, is_favorite: Optional[bool] = None
    ) -> None:
        """Update mutable account fields. Type and currency are never updated."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def get_account_entry_count(self, account_id: int) -> int:
        """Get count of ledger entries associated with an account."""
        pass

    @abstractmethod
    def get_account_trade_count(self, account_id: int) -> int:
        """Get count of stock transactions associated with an account."""
        pass

    # Ledger entry operations
    @abstractmethod
    def create_entry(
        self,
        account_id: int,
        type: EntryType,
        amount: Decimal,
        date: date,
        payee: Optional[str] = None,
        category: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a standalone ledger entry. Returns entry ID."""
        pass

    @abstractmethod
    def get_entry(self, entry_id: int) -> Optional[LedgerEntry]:
        """Get ledger entry by ID."""
        pass

    @abstractmethod
    def list_entries(
        self,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[LedgerEntry]:
        """List ledger entries ordered by date and ID, newest first."""
        pass

    @abstractmethod
    def delete_entry(self, entry_id: int) -> None:
        """Delete a ledger entry."""
        pass

    # Recurring template operations
    @abstractmethod
    def create_recurring(
        self,
        account_id: int,
        type: EntryType,
        amount: Decimal,
        frequency: Frequency,
        next_due_date: date,
        payee: Optional[str] = None,
        category: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a recurring template. Returns template ID."""
        pass

    @abstractmethod
    def get_recurring(self, template_id: int) -> Optional[RecurringTemplate]:
        """Get recurring template by ID."""
        pass

    @abstractmethod
    def list_recurring(
        self, account_id: Optional[int] = None, active_only: bool = False
    ) -> list[RecurringTemplate]:
        """List recurring templates ordered by next due date."""
        pass

    @abstractmethod
    def set_recurring_active(self, template_id: int, is_active: bool) -> None:
        """Activate or pause a recurring template."""
        pass

    @abstractmethod
    def delete_recurring(self, template_id: int) -> None:
        """Delete a recurring template."""
        pass

    # Stock transaction operations
    @abstractmethod
    def create_stock_transaction(
        self,
        account_id: int,
        symbol: str,
        type: TradeType,
        shares: Decimal,
        price: Decimal,
        fees: Decimal,
        date: date,
    ) -> int:
        """Create a stock transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_stock_transaction(self, trade_id: int) -> Optional[StockTransaction]:
        """Get stock transaction by ID."""
        pass

    @abstractmethod
    def list_stock_transactions(
        self, account_id: Optional[int] = None, symbol: Optional[str] = None
    ) -> list[StockTransaction]:
        """List stock transactions in replay order (date, then ID)."""
        pass

    @abstractmethod
    def delete_stock_transaction(self, trade_id: int) -> None:
        """Delete a stock transaction."""
        pass

    # Holding cache operations
    @abstractmethod
    def get_holding(self, account_id: int, symbol: str) -> Optional[Holding]:
        """Get cached holding for a (symbol, account) pair."""
        pass

    @abstractmethod
    def list_holdings(self, account_id: Optional[int] = None) -> list[Holding]:
        """List cached holdings."""
        pass

    @abstractmethod
    def save_holding(
        self, account_id: int, symbol: str, shares: Decimal, avg_cost: Decimal
    ) -> None:
        """Insert or update the cached holding for a (symbol, account) pair."""
        pass

    @abstractmethod
    def delete_holding(self, account_id: int, symbol: str) -> None:
        """Remove a cached holding if present."""
        pass

    # Transfer operations
    @abstractmethod
    def create_transfer(
        self,
        from_account_id: int,
        to_account_id: int,
        from_amount: Decimal,
        to_amount: Decimal,
        date: date,
        notes: Optional[str] = None,
    ) -> int:
        """Create a transfer and both of its ledger entries in one transaction.

        Raises:
            AtomicityViolationError: If either write fails. Nothing is persisted.
        """
        pass

    @abstractmethod
    def get_transfer(self, transfer_id: int) -> Optional[Transfer]:
        """Get transfer by ID."""
        pass

    @abstractmethod
    def list_transfers(self) -> list[Transfer]:
        """List transfers, newest first."""
        pass

    @abstractmethod
    def list_transfer_entries(self, transfer_id: int) -> list[LedgerEntry]:
        """List the ledger entries linked to a transfer."""
        pass

    @abstractmethod
    def delete_transfer(self, transfer_id: int) -> None:
        """Delete a transfer and both of its ledger entries in one transaction.

        Raises:
            AtomicityViolationError: If the delete fails. Nothing is removed.
        """
        pass

    # Dividend operations
    @abstractmethod
    def create_dividend(
        self,
        account_id: int,
        symbol: str,
        amount: Decimal,
        shares_held: Decimal,
        ex_date: date,
        pay_date: Optional[date],
        tax_rate: Decimal,
        tax_amount: Decimal,
        net_amount: Decimal,
    ) -> int:
        """Record a dividend payment. Returns dividend ID."""
        pass

    @abstractmethod
    def list_dividends(self, account_id: Optional[int] = None) -> list[Dividend]:
        """List dividends, newest ex-date first."""
        pass

    @abstractmethod
    def delete_dividend(self, dividend_id: int) -> None:
        """Delete a dividend record."""
        pass

    # Settings and exchange rates
    @abstractmethod
    def get_setting(self, key: str) -> Optional[str]:
        """Get a stored setting value."""
        pass

    @abstractmethod
    def set_setting(self, key: str, value: str) -> None:
        """Store a setting value."""
        pass

    @abstractmethod
    def list_exchange_rates(self) -> dict[str, Decimal]:
        """Get the stored currency to rate mapping."""
        pass

    @abstractmethod
    def set_exchange_rate(self, currency: str, rate: Decimal) -> None:
        """Insert or update the rate for one currency."""
        pass

    @abstractmethod
    def delete_exchange_rate(self, currency: str) -> None:
        """Remove the rate for one currency."""
        pass

    @abstractmethod
    def replace_exchange_rates(
        self, rates: dict[str, Decimal], settings: Optional[dict[str, str]] = None
    ) -> None:
        """Replace every stored rate, and optionally some settings, in one transaction."""
        pass

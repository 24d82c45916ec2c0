"""Domain model entities for wealthtrack.

These are pure data classes representing stored records and computed results,
independent of database schema. The engine functions only ever see these
types, never ORM rows.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    """Closed set of account types."""

    BANK = "bank"
    CASH = "cash"
    STOCK = "stock"
    LOAN = "loan"
    CREDIT = "credit"
    ASSET = "asset"


class EntryType(str, Enum):
    """Direction of a ledger entry or recurring template."""

    INFLOW = "inflow"
    OUTFLOW = "outflow"


class Frequency(str, Enum):
    """Recurrence frequency of a recurring template."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class TradeType(str, Enum):
    """Stock transaction side."""

    BUY = "buy"
    SELL = "sell"


LIQUID_ACCOUNT_TYPES = (AccountType.BANK, AccountType.CASH)


# Stored records


@dataclass(frozen=True)
class Account:
    """Account domain entity."""

    id: int
    name: str
    type: AccountType
    currency: str
    initial_balance: Decimal
    is_favorite: bool = False
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class LedgerEntry:
    """One dated inflow or outflow against an account."""

    id: int
    account_id: int
    type: EntryType
    amount: Decimal
    date: date
    payee: Optional[str] = None
    category: Optional[str] = None
    notes: Optional[str] = None
    transfer_id: Optional[int] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class RecurringTemplate:
    """Recurring inflow or outflow, consumed unapplied by projections."""

    id: int
    account_id: int
    type: EntryType
    amount: Decimal
    frequency: Frequency
    next_due_date: date
    is_active: bool = True
    payee: Optional[str] = None
    category: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class StockTransaction:
    """Buy or sell of a symbol within a stock account."""

    id: Optional[int]
    account_id: int
    symbol: str
    type: TradeType
    shares: Decimal
    price: Decimal
    fees: Decimal
    date: date


@dataclass(frozen=True)
class Holding:
    """Cached position row for a (symbol, account) pair."""

    id: int
    account_id: int
    symbol: str
    shares: Decimal
    avg_cost: Decimal


@dataclass(frozen=True)
class Transfer:
    """Transfer between two accounts, owning two linked ledger entries."""

    id: int
    from_account_id: int
    to_account_id: int
    from_amount: Decimal
    to_amount: Decimal
    date: date
    notes: Optional[str] = None


@dataclass(frozen=True)
class Dividend:
    """Recorded dividend payment with its withheld tax."""

    id: int
    account_id: int
    symbol: str
    amount: Decimal
    shares_held: Decimal
    ex_date: date
    pay_date: Optional[date]
    tax_rate: Decimal
    tax_amount: Decimal
    net_amount: Decimal


# Computed results


@dataclass(frozen=True)
class AccountBalance:
    """Current balance of one account in its own currency."""

    account_id: int
    balance: Decimal
    currency: str
    type: AccountType


@dataclass(frozen=True)
class HoldingState:
    """Result of replaying a symbol's trade history."""

    symbol: Optional[str]
    account_id: Optional[int]
    shares: Decimal
    avg_cost: Decimal

    @property
    def cost_basis(self) -> Decimal:
        return self.shares * self.avg_cost


@dataclass(frozen=True)
class TypeTotal:
    """Account count and main-currency total for one account type."""

    count: int
    total: Decimal


@dataclass(frozen=True)
class NetWorthContribution:
    """How a single account enters net worth, in main currency."""

    account_id: int
    name: str
    type: AccountType
    currency: str
    balance: Decimal
    value_in_main_currency: Decimal
    contribution: Decimal


@dataclass(frozen=True)
class NetWorthSummary:
    """Net worth and per-type breakdown in the main currency."""

    main_currency: str
    total_net_worth: Decimal
    by_type: dict[AccountType, TypeTotal]
    accounts: tuple[NetWorthContribution, ...] = ()

    def type_total(self, account_type: AccountType) -> Decimal:
        return self.by_type[account_type].total

    @property
    def liquid_assets(self) -> Decimal:
        return sum(
            (self.type_total(t) for t in LIQUID_ACCOUNT_TYPES), Decimal("0")
        )

    @property
    def investments(self) -> Decimal:
        return self.type_total(AccountType.STOCK)

    @property
    def assets(self) -> Decimal:
        return self.type_total(AccountType.ASSET)

    @property
    def total_debt(self) -> Decimal:
        return self.type_total(AccountType.LOAN) + self.type_total(AccountType.CREDIT)


@dataclass(frozen=True)
class RecurringItem:
    """One recurring template expressed as a monthly amount in main currency."""

    name: str
    amount: Decimal
    frequency: Frequency
    monthly_amount: Decimal
    category: Optional[str] = None


@dataclass(frozen=True)
class MonthlyRecurringTotals:
    """Monthly income/expense totals derived from active recurring templates."""

    income: Decimal
    expenses: Decimal
    income_items: tuple[RecurringItem, ...] = ()
    expense_items: tuple[RecurringItem, ...] = ()

    @property
    def savings(self) -> Decimal:
        return self.income - self.expenses


@dataclass(frozen=True)
class MonthlyData:
    """One point of the net-worth time series."""

    month: str
    label: str
    net_worth: Decimal
    liquid_assets: Decimal
    investments: Decimal
    assets: Decimal
    total_debt: Decimal
    income: Decimal
    expenses: Decimal
    net_cash_flow: Decimal
    savings_rate: Decimal
    by_type: dict[AccountType, Decimal]


@dataclass(frozen=True)
class ProjectionSummary:
    """Headline figures of a projection."""

    monthly_income: Decimal
    monthly_expenses: Decimal
    monthly_savings: Decimal
    savings_rate: Decimal
    projected_year_end_net_worth: Decimal
    projected_net_worth_change: Decimal


@dataclass(frozen=True)
class ProjectionResult:
    """Year-to-date and 12-month forward net-worth series."""

    main_currency: str
    current_month: str
    ytd: tuple[MonthlyData, ...]
    future: tuple[MonthlyData, ...]
    summary: ProjectionSummary
    recurring_breakdown: MonthlyRecurringTotals


@dataclass(frozen=True)
class MonthlyPnL:
    """Income and expenses of one calendar month."""

    month: str
    label: str
    income: Decimal
    expenses: Decimal
    net: Decimal
    transaction_count: int


@dataclass(frozen=True)
class PnLSummary:
    """Monthly P&L rows for one year."""

    main_currency: str
    months: tuple[MonthlyPnL, ...]


@dataclass(frozen=True)
class TransactionDetail:
    """A ledger entry converted to the main currency for month detail views."""

    id: int
    date: date
    type: EntryType
    amount: Decimal
    amount_in_main_currency: Decimal
    payee: Optional[str]
    category: Optional[str]
    account_name: str
    account_currency: str
    notes: Optional[str]


@dataclass(frozen=True)
class PnLMonthDetail:
    """Totals and individual entries of one month."""

    month: str
    label: str
    main_currency: str
    income: Decimal
    expenses: Decimal
    net: Decimal
    transactions: tuple[TransactionDetail, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DividendTax:
    """Gross/tax/net split of a dividend payment."""

    gross_amount: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    net_amount: Decimal


@dataclass(frozen=True)
class DividendTaxSummary:
    """Dividend totals for one calendar year."""

    year: int
    total_gross: Decimal
    total_tax: Decimal
    total_net: Decimal
    count: int

"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so string columns become enums and
numeric columns become Decimals before anything reaches the domain layer.
"""

from decimal import Decimal

from wealthtrack.domain import entities as domain
from wealthtrack.database.models import (
    Account as ORMAccount,
    Dividend as ORMDividend,
    Holding as ORMHolding,
    LedgerEntry as ORMLedgerEntry,
    RecurringTemplate as ORMRecurringTemplate,
    StockTransaction as ORMStockTransaction,
    Transfer as ORMTransfer,
)


def _decimal(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        type=domain.AccountType(orm_account.type),
        currency=orm_account.currency,
        initial_balance=_decimal(orm_account.initial_balance),
        is_favorite=orm_account.is_favorite,
        created_at=orm_account.created_at,
    )


def entry_to_domain(orm_entry: ORMLedgerEntry) -> domain.LedgerEntry:
    """Convert SQLAlchemy LedgerEntry model to domain LedgerEntry entity."""
    return domain.LedgerEntry(
        id=orm_entry.id,
        account_id=orm_entry.account_id,
        type=domain.EntryType(orm_entry.type),
        amount=_decimal(orm_entry.amount),
        date=orm_entry.date,
        payee=orm_entry.payee,
        category=orm_entry.category,
        notes=orm_entry.notes,
        transfer_id=orm_entry.transfer_id,
        created_at=orm_entry.created_at,
    )


def recurring_to_domain(orm_template: ORMRecurringTemplate) -> domain.RecurringTemplate:
    """Convert SQLAlchemy RecurringTemplate model to domain entity."""
    return domain.RecurringTemplate(
        id=orm_template.id,
        account_id=orm_template.account_id,
        type=domain.EntryType(orm_template.type),
        amount=_decimal(orm_template.amount),
        frequency=domain.Frequency(orm_template.frequency),
        next_due_date=orm_template.next_due_date,
        is_active=orm_template.is_active,
        payee=orm_template.payee,
        category=orm_template.category,
        notes=orm_template.notes,
    )


def stock_transaction_to_domain(orm_trade: ORMStockTransaction) -> domain.StockTransaction:
    """Convert SQLAlchemy StockTransaction model to domain entity."""
    return domain.StockTransaction(
        id=orm_trade.id,
        account_id=orm_trade.account_id,
        symbol=orm_trade.symbol,
        type=domain.TradeType(orm_trade.type),
        shares=_decimal(orm_trade.shares),
        price=_decimal(orm_trade.price),
        fees=_decimal(orm_trade.fees),
        date=orm_trade.date,
    )


def holding_to_domain(orm_holding: ORMHolding) -> domain.Holding:
    """Convert SQLAlchemy Holding model to domain Holding entity."""
    return domain.Holding(
        id=orm_holding.id,
        account_id=orm_holding.account_id,
        symbol=orm_holding.symbol,
        shares=_decimal(orm_holding.shares),
        avg_cost=_decimal(orm_holding.avg_cost),
    )


def transfer_to_domain(orm_transfer: ORMTransfer) -> domain.Transfer:
    """Convert SQLAlchemy Transfer model to domain Transfer entity."""
    return domain.Transfer(
        id=orm_transfer.id,
        from_account_id=orm_transfer.from_account_id,
        to_account_id=orm_transfer.to_account_id,
        from_amount=_decimal(orm_transfer.from_amount),
        to_amount=_decimal(orm_transfer.to_amount),
        date=orm_transfer.date,
        notes=orm_transfer.notes,
    )


def dividend_to_domain(orm_dividend: ORMDividend) -> domain.Dividend:
    """Convert SQLAlchemy Dividend model to domain Dividend entity."""
    return domain.Dividend(
        id=orm_dividend.id,
        account_id=orm_dividend.account_id,
        symbol=orm_dividend.symbol,
        amount=_decimal(orm_dividend.amount),
        shares_held=_decimal(orm_dividend.shares_held),
        ex_date=orm_dividend.ex_date,
        pay_date=orm_dividend.pay_date,
        tax_rate=_decimal(orm_dividend.tax_rate),
        tax_amount=_decimal(orm_dividend.tax_amount),
        net_amount=_decimal(orm_dividend.net_amount),
    )

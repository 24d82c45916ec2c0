"""SQLAlchemy models for wealthtrack database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

MONEY = Numeric(14, 2)
QUANTITY = Numeric(18, 6)


class Account(Base):
    """Account model. Type and currency are fixed at creation."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    type = Column(String, nullable=False)
    currency = Column(String(3), nullable=False)
    initial_balance = Column(MONEY, nullable=False, default=0)
    is_favorite = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    entries = relationship("LedgerEntry", back_populates="account")
    recurring = relationship(
        "RecurringTemplate", back_populates="account", cascade="all, delete-orphan"
    )
    stock_transactions = relationship("StockTransaction", back_populates="account")
    holdings = relationship("Holding", back_populates="account", cascade="all, delete-orphan")


class LedgerEntry(Base):
    """Ledger entry model (one inflow or outflow)."""

    __tablename__ = "account_transactions"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    type = Column(String, nullable=False)
    amount = Column(MONEY, nullable=False)
    date = Column(Date, nullable=False)
    payee = Column(String, nullable=True)
    category = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    transfer_id = Column(Integer, ForeignKey("transfers.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    account = relationship("Account", back_populates="entries")
    transfer = relationship("Transfer", back_populates="entries")


class RecurringTemplate(Base):
    """Recurring transaction template model."""

    __tablename__ = "recurring_transactions"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    type = Column(String, nullable=False)
    amount = Column(MONEY, nullable=False)
    frequency = Column(String, nullable=False)
    next_due_date = Column(Date, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    payee = Column(String, nullable=True)
    category = Column(String, nullable=True)
    notes = Column(String, nullable=True)

    # Relationships
    account = relationship("Account", back_populates="recurring")


class StockTransaction(Base):
    """Stock buy/sell model."""

    __tablename__ = "stock_transactions"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    symbol = Column(String, nullable=False)
    type = Column(String, nullable=False)
    shares = Column(QUANTITY, nullable=False)
    price = Column(QUANTITY, nullable=False)
    fees = Column(MONEY, nullable=False, default=0)
    date = Column(Date, nullable=False)

    # Relationships
    account = relationship("Account", back_populates="stock_transactions")


class Holding(Base):
    """Cached position derived from stock transactions."""

    __tablename__ = "holdings"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    symbol = Column(String, nullable=False)
    shares = Column(QUANTITY, nullable=False)
    avg_cost = Column(QUANTITY, nullable=False)

    __table_args__ = (UniqueConstraint("symbol", "account_id", name="uq_holding_symbol_account"),)

    # Relationships
    account = relationship("Account", back_populates="holdings")


class Transfer(Base):
    """Transfer model, owner of two linked ledger entries."""

    __tablename__ = "transfers"

    id = Column(Integer, primary_key=True)
    from_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    to_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    from_amount = Column(MONEY, nullable=False)
    to_amount = Column(MONEY, nullable=False)
    date = Column(Date, nullable=False)
    notes = Column(String, nullable=True)

    # Relationships
    entries = relationship("LedgerEntry", back_populates="transfer")


class Dividend(Base):
    """Dividend payment model."""

    __tablename__ = "dividends"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    symbol = Column(String, nullable=False)
    amount = Column(MONEY, nullable=False)
    shares_held = Column(QUANTITY, nullable=False)
    ex_date = Column(Date, nullable=False)
    pay_date = Column(Date, nullable=True)
    tax_rate = Column(Numeric(5, 4), nullable=False)
    tax_amount = Column(MONEY, nullable=False)
    net_amount = Column(MONEY, nullable=False)

    __table_args__ = (
        UniqueConstraint("account_id", "symbol", "ex_date", name="uq_dividend_symbol_exdate"),
    )


class Setting(Base):
    """Key/value settings (main currency, base currency, tax rate)."""

    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False)


class ExchangeRate(Base):
    """Supplied exchange rate relative to the base currency."""

    __tablename__ = "exchange_rates"

    currency = Column(String(3), primary_key=True)
    rate = Column(Numeric(18, 8), nullable=False)
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)

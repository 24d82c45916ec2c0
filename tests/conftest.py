"""Shared pytest fixtures for wealthtrack tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from wealthtrack.database.factories import create_sqlite_database
from wealthtrack.domain.account import AccountService
from wealthtrack.domain.balance import BalanceService
from wealthtrack.domain.cost_basis import PortfolioService
from wealthtrack.domain.dividends import DividendService
from wealthtrack.domain.entities import AccountType
from wealthtrack.domain.net_worth import NetWorthService
from wealthtrack.domain.pnl import PnLService
from wealthtrack.domain.projection import ProjectionService
from wealthtrack.domain.recurring import RecurringService
from wealthtrack.domain.settings import SettingsService
from wealthtrack.domain.transfer import TransferService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def balance_service(temp_db):
    return BalanceService(temp_db)


@pytest.fixture
def portfolio_service(temp_db):
    return PortfolioService(temp_db)


@pytest.fixture
def recurring_service(temp_db):
    return RecurringService(temp_db)


@pytest.fixture
def settings_service(temp_db):
    return SettingsService(temp_db)


@pytest.fixture
def transfer_service(temp_db):
    return TransferService(temp_db)


@pytest.fixture
def dividend_service(temp_db):
    return DividendService(temp_db)


@pytest.fixture
def net_worth_service(temp_db):
    return NetWorthService(temp_db)


@pytest.fixture
def projection_service(temp_db):
    return ProjectionService(temp_db)


@pytest.fixture
def pnl_service(temp_db):
    return PnLService(temp_db)


@pytest.fixture
def usd_rate(settings_service):
    """Store 1 USD = 0.90 EUR."""
    settings_service.set_exchange_rate("USD", Decimal("0.90"))
    return Decimal("0.90")


@pytest.fixture
def checking(account_service):
    """EUR bank account opened with 1000."""
    account_id = account_service.create_account(
        name="Checking", type=AccountType.BANK, currency="EUR", initial_balance=Decimal("1000")
    )
    return account_service.get_account(account_id)


@pytest.fixture
def savings(account_service):
    """Empty EUR bank account."""
    account_id = account_service.create_account(
        name="Savings", type=AccountType.BANK, currency="EUR", initial_balance=Decimal("0")
    )
    return account_service.get_account(account_id)


@pytest.fixture
def usd_checking(account_service, usd_rate):
    """USD bank account opened with 500."""
    account_id = account_service.create_account(
        name="USD Checking", type=AccountType.BANK, currency="USD", initial_balance=Decimal("500")
    )
    return account_service.get_account(account_id)


@pytest.fixture
def brokerage(account_service):
    """EUR stock account."""
    account_id = account_service.create_account(
        name="Brokerage", type=AccountType.STOCK, currency="EUR", initial_balance=Decimal("0")
    )
    return account_service.get_account(account_id)


@pytest.fixture
def aapl_position(portfolio_service, brokerage):
    """Buy 10 AAPL @ 100 with a 5 fee, then sell 4."""
    portfolio_service.record_trade(
        account_id=brokerage.id,
        symbol="AAPL",
        type="buy",
        shares=Decimal("10"),
        price=Decimal("100"),
        fees=Decimal("5"),
        date=date(2026, 1, 5),
    )
    portfolio_service.record_trade(
        account_id=brokerage.id,
        symbol="AAPL",
        type="sell",
        shares=Decimal("4"),
        price=Decimal("120"),
        date=date(2026, 2, 1),
    )
    return brokerage


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()

"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from wealthtrack.database.factories import create_sqlite_database
from wealthtrack.domain import entities
from wealthtrack.domain.errors import NotFoundError


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_account_returns_domain_model(self, temp_db):
        account_id = temp_db.create_account(
            name="Checking",
            type=entities.AccountType.BANK,
            currency="EUR",
            initial_balance=Decimal("1000"),
        )

        account = temp_db.get_account(account_id)

        assert isinstance(account, entities.Account)
        assert account.name == "Checking"
        assert account.type is entities.AccountType.BANK
        assert isinstance(account.initial_balance, Decimal)
        assert isinstance(account.created_at, datetime)

    def test_missing_rows(self, temp_db):
        assert temp_db.get_account(1) is None
        assert temp_db.get_entry(1) is None
        assert temp_db.get_transfer(1) is None
        with pytest.raises(NotFoundError):
            temp_db.delete_entry(1)
        with pytest.raises(NotFoundError):
            temp_db.update_account(1, name="x")

    def test_entries_newest_first(self, temp_db, checking):
        older = temp_db.create_entry(
            checking.id, entities.EntryType.INFLOW, Decimal("1"), date(2026, 1, 1)
        )
        newer = temp_db.create_entry(
            checking.id, entities.EntryType.INFLOW, Decimal("1"), date(2026, 1, 2)
        )
        same_day = temp_db.create_entry(
            checking.id, entities.EntryType.INFLOW, Decimal("1"), date(2026, 1, 2)
        )

        assert [e.id for e in temp_db.list_entries()] == [same_day, newer, older]

    def test_stock_transactions_in_replay_order(self, temp_db, brokerage):
        later = temp_db.create_stock_transaction(
            brokerage.id, "AAPL", entities.TradeType.BUY, Decimal("1"), Decimal("10"),
            Decimal("0"), date(2026, 2, 1),
        )
        earlier = temp_db.create_stock_transaction(
            brokerage.id, "AAPL", entities.TradeType.BUY, Decimal("1"), Decimal("10"),
            Decimal("0"), date(2026, 1, 1),
        )

        trades = temp_db.list_stock_transactions(account_id=brokerage.id, symbol="AAPL")

        assert [t.id for t in trades] == [earlier, later]
        assert all(isinstance(t, entities.StockTransaction) for t in trades)

    def test_holding_upsert(self, temp_db, brokerage):
        temp_db.save_holding(brokerage.id, "AAPL", Decimal("1"), Decimal("10"))
        temp_db.save_holding(brokerage.id, "AAPL", Decimal("3"), Decimal("12"))

        holdings = temp_db.list_holdings(brokerage.id)

        assert len(holdings) == 1
        assert isinstance(holdings[0], entities.Holding)
        assert holdings[0].shares == Decimal("3")

        temp_db.delete_holding(brokerage.id, "AAPL")
        assert temp_db.get_holding(brokerage.id, "AAPL") is None

    def test_recurring_filters(self, temp_db, checking, savings):
        active = temp_db.create_recurring(
            checking.id, entities.EntryType.OUTFLOW, Decimal("10"), entities.Frequency.MONTHLY,
            date(2026, 3, 1),
        )
        paused = temp_db.create_recurring(
            savings.id, entities.EntryType.OUTFLOW, Decimal("10"), entities.Frequency.YEARLY,
            date(2026, 2, 1),
        )
        temp_db.set_recurring_active(paused, False)

        assert [t.id for t in temp_db.list_recurring()] == [paused, active]
        assert [t.id for t in temp_db.list_recurring(active_only=True)] == [active]
        assert [t.id for t in temp_db.list_recurring(account_id=savings.id)] == [paused]

    def test_settings_and_rates(self, temp_db):
        assert temp_db.get_setting("main_currency") is None

        temp_db.set_setting("main_currency", "USD")
        temp_db.set_setting("main_currency", "GBP")
        temp_db.set_exchange_rate("USD", Decimal("0.9"))

        assert temp_db.get_setting("main_currency") == "GBP"
        assert temp_db.list_exchange_rates() == {"USD": Decimal("0.9")}

        temp_db.delete_exchange_rate("USD")
        assert temp_db.list_exchange_rates() == {}

    def test_replace_exchange_rates(self, temp_db):
        temp_db.set_exchange_rate("USD", Decimal("0.5"))
        temp_db.set_exchange_rate("JPY", Decimal("0.006"))

        temp_db.replace_exchange_rates(
            {"USD": Decimal("1"), "EUR": Decimal("2")}, settings={"base_currency": "USD"}
        )

        assert temp_db.list_exchange_rates() == {"EUR": Decimal("2"), "USD": Decimal("1")}
        assert temp_db.get_setting("base_currency") == "USD"

    def test_data_survives_reconnect(self, temp_db, checking):
        other = create_sqlite_database(database_path=temp_db.database_path)

        assert [a.name for a in other.list_accounts()] == ["Checking"]
        other.disconnect()


def test_factory_uses_environment_variable(tmp_path, monkeypatch):
    db_path = tmp_path / "env.db"
    monkeypatch.setenv("WEALTHTRACK_DB_PATH", str(db_path))

    db = create_sqlite_database()

    assert db.database_url == f"sqlite:///{db_path}"
    db.disconnect()

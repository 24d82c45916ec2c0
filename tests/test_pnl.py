"""Tests for monthly P&L and dividend taxes."""

import pytest
from datetime import date
from decimal import Decimal

from wealthtrack.domain.currency import RateTable
from wealthtrack.domain.dividends import calculate_dividend_tax, summarize_dividend_taxes
from wealthtrack.domain.entities import (
    Account,
    AccountType,
    Dividend,
    EntryType,
    LedgerEntry,
)
from wealthtrack.domain.errors import ConflictError, ValidationError
from wealthtrack.domain.pnl import month_detail, parse_month, summarize_months

RATES = RateTable(base_currency="EUR", rates={"USD": Decimal("0.90")})

ACCOUNTS = {
    1: Account(id=1, name="Checking", type=AccountType.BANK, currency="EUR",
               initial_balance=Decimal("0")),
    2: Account(id=2, name="Wallet", type=AccountType.CASH, currency="USD",
               initial_balance=Decimal("0")),
    3: Account(id=3, name="Visa", type=AccountType.CREDIT, currency="EUR",
               initial_balance=Decimal("5000")),
}


def make_entry(entry_id, account_id, type, amount, entry_date, transfer_id=None, payee=None):
    return LedgerEntry(
        id=entry_id,
        account_id=account_id,
        type=type,
        amount=Decimal(amount),
        date=entry_date,
        payee=payee,
        transfer_id=transfer_id,
    )


@pytest.fixture
def entries():
    return [
        make_entry(1, 1, EntryType.INFLOW, "3000", date(2026, 1, 25), payee="Employer"),
        make_entry(2, 2, EntryType.OUTFLOW, "100", date(2026, 1, 10), payee="Market"),
        make_entry(3, 1, EntryType.OUTFLOW, "50", date(2026, 2, 3)),
        # Transfer legs between own accounts
        make_entry(4, 1, EntryType.OUTFLOW, "500", date(2026, 1, 15), transfer_id=1),
        make_entry(5, 2, EntryType.INFLOW, "555", date(2026, 1, 15), transfer_id=1),
        # Credit card spending is not bank or cash
        make_entry(6, 3, EntryType.OUTFLOW, "80", date(2026, 1, 20)),
        # Previous year
        make_entry(7, 1, EntryType.INFLOW, "999", date(2025, 12, 31)),
    ]


class TestSummarizeMonths:
    def test_current_year_runs_to_current_month(self, entries):
        summary = summarize_months(entries, ACCOUNTS, 2026, "EUR", RATES, date(2026, 3, 10))

        assert [m.month for m in summary.months] == ["2026-01", "2026-02", "2026-03"]
        assert summary.main_currency == "EUR"

    def test_january_totals(self, entries):
        summary = summarize_months(entries, ACCOUNTS, 2026, "EUR", RATES, date(2026, 3, 10))
        january = summary.months[0]

        assert january.label == "January 2026"
        assert january.income == Decimal("3000.00")
        assert january.expenses == Decimal("90.00")
        assert january.net == Decimal("2910.00")
        assert january.transaction_count == 2

    def test_empty_month_is_listed_with_zeros(self, entries):
        summary = summarize_months(entries, ACCOUNTS, 2026, "EUR", RATES, date(2026, 3, 10))
        march = summary.months[2]

        assert march.income == Decimal("0.00")
        assert march.expenses == Decimal("0.00")
        assert march.transaction_count == 0

    def test_past_year_lists_all_months(self, entries):
        summary = summarize_months(entries, ACCOUNTS, 2025, "EUR", RATES, date(2026, 3, 10))

        assert len(summary.months) == 12
        assert summary.months[-1].income == Decimal("999.00")

    def test_future_year_is_empty(self, entries):
        summary = summarize_months(entries, ACCOUNTS, 2027, "EUR", RATES, date(2026, 3, 10))

        assert summary.months == ()


class TestMonthDetail:
    def test_newest_entry_first(self, entries):
        detail = month_detail(entries, ACCOUNTS, "2026-01", "EUR", RATES)

        assert [t.id for t in detail.transactions] == [1, 2]
        assert detail.label == "January 2026"
        assert detail.net == Decimal("2910.00")

    def test_converted_amounts(self, entries):
        detail = month_detail(entries, ACCOUNTS, "2026-01", "EUR", RATES)
        market = detail.transactions[1]

        assert market.amount == Decimal("100")
        assert market.amount_in_main_currency == Decimal("90.00")
        assert market.account_name == "Wallet"
        assert market.account_currency == "USD"

    def test_same_day_entries_ordered_by_id_desc(self):
        same_day = [
            make_entry(10, 1, EntryType.OUTFLOW, "1", date(2026, 4, 2)),
            make_entry(11, 1, EntryType.OUTFLOW, "2", date(2026, 4, 2)),
        ]
        detail = month_detail(same_day, ACCOUNTS, "2026-04", "EUR", RATES)

        assert [t.id for t in detail.transactions] == [11, 10]

    @pytest.mark.parametrize("month", ["2026-13", "2026-1", "January 2026", ""])
    def test_invalid_month(self, entries, month):
        with pytest.raises(ValidationError):
            month_detail(entries, ACCOUNTS, month, "EUR", RATES)


def test_parse_month():
    assert parse_month("2026-02") == date(2026, 2, 1)


class TestDividendTax:
    def test_default_rate(self):
        tax = calculate_dividend_tax(Decimal("0.24"), Decimal("100"), Decimal("0.30"))

        assert tax.gross_amount == Decimal("24.00")
        assert tax.tax_amount == Decimal("7.20")
        assert tax.net_amount == Decimal("16.80")

    def test_amounts_rounded_to_cents(self):
        tax = calculate_dividend_tax(Decimal("0.333"), Decimal("10"), Decimal("0.15"))

        assert tax.gross_amount == Decimal("3.33")
        assert tax.tax_amount == Decimal("0.50")
        assert tax.net_amount == Decimal("2.83")

    @pytest.mark.parametrize("rate", ["-0.01", "1.5"])
    def test_rate_out_of_range(self, rate):
        with pytest.raises(ValidationError):
            calculate_dividend_tax(Decimal("1"), Decimal("1"), Decimal(rate))


def make_dividend(dividend_id, amount, ex_date, pay_date=None, account_id=1):
    gross = Decimal(amount)
    tax = gross * Decimal("0.30")
    return Dividend(
        id=dividend_id,
        account_id=account_id,
        symbol="AAPL",
        amount=gross,
        shares_held=Decimal("100"),
        ex_date=ex_date,
        pay_date=pay_date,
        tax_rate=Decimal("0.30"),
        tax_amount=tax,
        net_amount=gross - tax,
    )


class TestSummarizeDividendTaxes:
    def test_grouped_by_pay_date_year(self):
        dividends = [
            make_dividend(1, "100", date(2025, 12, 20), pay_date=date(2026, 1, 10)),
            make_dividend(2, "50", date(2025, 6, 1)),
            make_dividend(3, "10", date(2026, 3, 1)),
        ]
        summaries = summarize_dividend_taxes(dividends)

        assert [s.year for s in summaries] == [2026, 2025]
        assert summaries[0].total_gross == Decimal("110.00")
        assert summaries[0].total_tax == Decimal("33.00")
        assert summaries[0].total_net == Decimal("77.00")
        assert summaries[0].count == 2

    def test_filters(self):
        dividends = [
            make_dividend(1, "100", date(2026, 2, 1)),
            make_dividend(2, "40", date(2026, 2, 1), account_id=2),
            make_dividend(3, "50", date(2025, 6, 1)),
        ]

        by_year = summarize_dividend_taxes(dividends, year=2025)
        by_account = summarize_dividend_taxes(dividends, account_id=2)

        assert [(s.year, s.total_gross) for s in by_year] == [(2025, Decimal("50.00"))]
        assert [(s.year, s.total_gross) for s in by_account] == [(2026, Decimal("40.00"))]


class TestDividendService:
    def test_defaults_to_position_and_stored_rate(self, dividend_service, aapl_position):
        dividend_id = dividend_service.record_dividend(
            aapl_position.id, "aapl", Decimal("0.50"), ex_date=date(2026, 3, 1)
        )

        dividend = dividend_service.list_dividends()[0]
        assert dividend.id == dividend_id
        assert dividend.symbol == "AAPL"
        assert dividend.shares_held == Decimal("6")
        assert dividend.amount == Decimal("3.00")
        assert dividend.tax_amount == Decimal("0.90")
        assert dividend.net_amount == Decimal("2.10")

    def test_explicit_rate_and_shares(self, dividend_service, settings_service, brokerage):
        settings_service.set_dividend_tax_rate(Decimal("0.15"))

        dividend_service.record_dividend(
            brokerage.id, "MSFT", Decimal("1"), ex_date=date(2026, 3, 1),
            shares_held=Decimal("20"),
        )

        assert dividend_service.list_dividends()[0].tax_amount == Decimal("3.00")

    def test_no_position_on_ex_date(self, dividend_service, aapl_position):
        with pytest.raises(ValidationError, match="No AAPL shares"):
            dividend_service.record_dividend(
                aapl_position.id, "AAPL", Decimal("0.50"), ex_date=date(2026, 1, 1)
            )

    def test_duplicate_rejected(self, dividend_service, aapl_position):
        dividend_service.record_dividend(
            aapl_position.id, "AAPL", Decimal("0.50"), ex_date=date(2026, 3, 1)
        )
        with pytest.raises(ConflictError):
            dividend_service.record_dividend(
                aapl_position.id, "AAPL", Decimal("0.50"), ex_date=date(2026, 3, 1)
            )

    def test_non_stock_account_rejected(self, dividend_service, checking):
        with pytest.raises(ValidationError):
            dividend_service.record_dividend(
                checking.id, "AAPL", Decimal("0.50"), ex_date=date(2026, 3, 1),
                shares_held=Decimal("1"),
            )

    def test_tax_summary(self, dividend_service, aapl_position):
        dividend_service.record_dividend(
            aapl_position.id, "AAPL", Decimal("0.50"), ex_date=date(2026, 3, 1),
            pay_date=date(2026, 3, 15),
        )

        summaries = dividend_service.get_tax_summary(year=2026)

        assert summaries[0].total_net == Decimal("2.10")

    def test_delete(self, dividend_service, aapl_position):
        dividend_id = dividend_service.record_dividend(
            aapl_position.id, "AAPL", Decimal("0.50"), ex_date=date(2026, 3, 1)
        )
        dividend_service.delete_dividend(dividend_id)

        assert dividend_service.list_dividends() == []


class TestPnLService:
    def test_transfers_do_not_count(
        self, pnl_service, account_service, transfer_service, checking, savings
    ):
        account_service.add_entry(
            checking.id, EntryType.INFLOW, Decimal("3000"), date(2026, 2, 1), payee="Employer"
        )
        account_service.add_entry(
            checking.id, EntryType.OUTFLOW, Decimal("120.40"), date(2026, 2, 9), category="Food"
        )
        transfer_service.create_transfer(checking.id, savings.id, Decimal("1000"), date(2026, 2, 10))

        summary = pnl_service.get_monthly_summary(year=2026, today=date(2026, 2, 28))
        february = summary.months[1]

        assert february.income == Decimal("3000.00")
        assert february.expenses == Decimal("120.40")
        assert february.transaction_count == 2

    def test_month_detail(self, pnl_service, account_service, usd_checking):
        account_service.add_entry(
            usd_checking.id, EntryType.OUTFLOW, Decimal("10"), date(2026, 2, 28)
        )
        account_service.add_entry(
            usd_checking.id, EntryType.OUTFLOW, Decimal("20"), date(2026, 3, 1)
        )

        detail = pnl_service.get_month_detail("2026-02")

        assert len(detail.transactions) == 1
        assert detail.expenses == Decimal("9.00")

    def test_month_detail_invalid(self, pnl_service):
        with pytest.raises(ValidationError):
            pnl_service.get_month_detail("02-2026")

"""Tests for recurring templates and monthly normalization."""

import pytest
from datetime import date
from decimal import Decimal

from wealthtrack.domain.currency import RateTable, round_currency
from wealthtrack.domain.entities import (
    Account,
    AccountType,
    EntryType,
    Frequency,
    RecurringTemplate,
)
from wealthtrack.domain.errors import NotFoundError, ValidationError
from wealthtrack.domain.recurring import (
    calculate_monthly_recurring,
    monthly_multiplier,
    to_monthly_amount,
)

RATES = RateTable(base_currency="EUR", rates={"USD": Decimal("0.90")})

ACCOUNTS = {
    1: Account(id=1, name="Checking", type=AccountType.BANK, currency="EUR",
               initial_balance=Decimal("0")),
    2: Account(id=2, name="US Checking", type=AccountType.BANK, currency="USD",
               initial_balance=Decimal("0")),
}


def make_template(template_id, type, amount, frequency=Frequency.MONTHLY, account_id=1,
                  payee=None, category=None, is_active=True):
    return RecurringTemplate(
        id=template_id,
        account_id=account_id,
        type=type,
        amount=Decimal(amount),
        frequency=frequency,
        next_due_date=date(2026, 2, 1),
        is_active=is_active,
        payee=payee,
        category=category,
    )


class TestMonthlyMultiplier:
    def test_weekly(self):
        assert to_monthly_amount(Decimal("100"), Frequency.WEEKLY) == Decimal("433.00")

    def test_biweekly(self):
        assert to_monthly_amount(Decimal("100"), Frequency.BIWEEKLY) == Decimal("217.00")

    def test_monthly(self):
        assert to_monthly_amount(Decimal("100"), Frequency.MONTHLY) == Decimal("100")

    def test_yearly(self):
        assert round_currency(to_monthly_amount(Decimal("1200"), "yearly")) == Decimal("100.00")

    def test_unknown_frequency(self):
        with pytest.raises(ValidationError, match="daily"):
            monthly_multiplier("daily")


class TestCalculateMonthlyRecurring:
    def test_income_and_expenses_in_main_currency(self):
        templates = [
            make_template(1, EntryType.INFLOW, "3000", payee="Employer", category="Salary"),
            make_template(2, EntryType.OUTFLOW, "1000", payee="Landlord", category="Rent"),
            make_template(3, EntryType.OUTFLOW, "100", account_id=2, payee="Gym"),
        ]
        totals = calculate_monthly_recurring(templates, ACCOUNTS, "EUR", RATES)

        assert totals.income == Decimal("3000")
        assert totals.expenses == Decimal("1090")
        assert totals.savings == Decimal("1910")

    def test_inactive_templates_are_skipped(self):
        templates = [
            make_template(1, EntryType.INFLOW, "3000"),
            make_template(2, EntryType.OUTFLOW, "500", is_active=False),
        ]
        totals = calculate_monthly_recurring(templates, ACCOUNTS, "EUR", RATES)

        assert totals.expenses == Decimal("0")
        assert totals.expense_items == ()

    def test_items_sorted_by_monthly_amount(self):
        templates = [
            make_template(1, EntryType.OUTFLOW, "15", payee="Streaming"),
            make_template(2, EntryType.OUTFLOW, "100", frequency=Frequency.WEEKLY, payee="Food"),
            make_template(3, EntryType.OUTFLOW, "900", payee="Rent", category="Housing"),
        ]
        totals = calculate_monthly_recurring(templates, ACCOUNTS, "EUR", RATES)

        assert [item.name for item in totals.expense_items] == ["Rent", "Food", "Streaming"]
        assert totals.expense_items[1].monthly_amount == Decimal("433.00")

    def test_missing_names_and_categories_get_defaults(self):
        templates = [
            make_template(1, EntryType.INFLOW, "50"),
            make_template(2, EntryType.OUTFLOW, "20"),
        ]
        totals = calculate_monthly_recurring(templates, ACCOUNTS, "EUR", RATES)

        assert totals.income_items[0].name == "Unknown"
        assert totals.income_items[0].category is None
        assert totals.expense_items[0].name == "Unknown"
        assert totals.expense_items[0].category == "Uncategorized"

    def test_unknown_account(self):
        templates = [make_template(1, EntryType.INFLOW, "50", account_id=99)]

        with pytest.raises(NotFoundError):
            calculate_monthly_recurring(templates, ACCOUNTS, "EUR", RATES)


class TestRecurringService:
    def test_create_and_list(self, recurring_service, checking):
        template_id = recurring_service.create_template(
            account_id=checking.id,
            type=EntryType.INFLOW,
            amount=Decimal("3000"),
            frequency=Frequency.MONTHLY,
            next_due_date=date(2026, 2, 1),
            payee="Employer",
        )

        templates = recurring_service.list_templates()
        assert [t.id for t in templates] == [template_id]
        assert templates[0].frequency == Frequency.MONTHLY
        assert templates[0].is_active is True

    def test_negative_amount_rejected(self, recurring_service, checking):
        with pytest.raises(ValidationError):
            recurring_service.create_template(
                checking.id, EntryType.OUTFLOW, Decimal("-1"), Frequency.MONTHLY, date(2026, 2, 1)
            )

    def test_unknown_account_rejected(self, recurring_service):
        with pytest.raises(NotFoundError):
            recurring_service.create_template(
                99, EntryType.OUTFLOW, Decimal("1"), Frequency.MONTHLY, date(2026, 2, 1)
            )

    def test_pause_and_resume(self, recurring_service, checking):
        template_id = recurring_service.create_template(
            checking.id, EntryType.OUTFLOW, Decimal("50"), Frequency.WEEKLY, date(2026, 2, 1)
        )

        recurring_service.set_active(template_id, False)
        assert recurring_service.list_templates(active_only=True) == []

        recurring_service.set_active(template_id, True)
        assert len(recurring_service.list_templates(active_only=True)) == 1

    def test_list_due(self, recurring_service, checking):
        due_id = recurring_service.create_template(
            checking.id, EntryType.OUTFLOW, Decimal("50"), Frequency.MONTHLY, date(2026, 2, 1)
        )
        recurring_service.create_template(
            checking.id, EntryType.OUTFLOW, Decimal("60"), Frequency.MONTHLY, date(2026, 3, 1)
        )

        due = recurring_service.list_due(date(2026, 2, 15))

        assert [t.id for t in due] == [due_id]

    def test_delete(self, recurring_service, checking):
        template_id = recurring_service.create_template(
            checking.id, EntryType.OUTFLOW, Decimal("50"), Frequency.MONTHLY, date(2026, 2, 1)
        )
        recurring_service.delete_template(template_id)

        assert recurring_service.get_template(template_id) is None
        with pytest.raises(NotFoundError):
            recurring_service.delete_template(template_id)

    def test_monthly_totals_use_account_currency(
        self, recurring_service, settings_service, usd_checking
    ):
        recurring_service.create_template(
            usd_checking.id, EntryType.INFLOW, Decimal("1000"), Frequency.MONTHLY, date(2026, 2, 1)
        )

        totals = recurring_service.get_monthly_totals("EUR", settings_service.get_rate_table())

        assert totals.income == Decimal("900")

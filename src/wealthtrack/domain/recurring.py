"""Recurring transaction templates and their monthly equivalents."""

import logging
from datetime import date
from decimal import Decimal
from operator import attrgetter
from typing import Iterable, Mapping, Optional

from wealthtrack.database.base import Database
from wealthtrack.domain.currency import RateTable, convert_currency
from wealthtrack.domain.entities import (
    Account,
    EntryType,
    Frequency,
    MonthlyRecurringTotals,
    RecurringItem,
    RecurringTemplate,
)
from wealthtrack.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    recurring_not_found,
)

logger = logging.getLogger(__name__)

# Average weeks per month, not calendar-exact: a weekly amount is counted
# 4.33 times and a biweekly one 2.17 times in every month.
MONTHLY_MULTIPLIERS: dict[Frequency, Decimal] = {
    Frequency.WEEKLY: Decimal("4.33"),
    Frequency.BIWEEKLY: Decimal("2.17"),
    Frequency.MONTHLY: Decimal("1"),
    Frequency.YEARLY: Decimal("1") / Decimal("12"),
}


def monthly_multiplier(frequency: Frequency | str) -> Decimal:
    """Factor converting an amount at ``frequency`` into a monthly amount.

    Raises:
        ValidationError: If the frequency is unknown
    """
    try:
        return MONTHLY_MULTIPLIERS[Frequency(frequency)]
    except ValueError:
        raise ValidationError(f"Unknown frequency '{frequency}'") from None


def to_monthly_amount(amount: Decimal, frequency: Frequency | str) -> Decimal:
    """Monthly-equivalent of a recurring amount."""
    return amount * monthly_multiplier(frequency)


def calculate_monthly_recurring(
    templates: Iterable[RecurringTemplate],
    accounts: Mapping[int, Account],
    main_currency: str,
    rate_table: RateTable,
) -> MonthlyRecurringTotals:
    """Monthly income and expenses implied by active recurring templates.

    Each template's monthly amount is converted from its account's currency.

    Raises:
        NotFoundError: If a template references an unknown account
        UnknownCurrencyError: If an account currency has no rate
    """
    income = Decimal("0")
    expenses = Decimal("0")
    income_items: list[RecurringItem] = []
    expense_items: list[RecurringItem] = []

    for template in templates:
        if not template.is_active:
            continue
        account = accounts.get(template.account_id)
        if account is None:
            raise NotFoundError(account_not_found(template.account_id))

        monthly_amount = convert_currency(
            to_monthly_amount(template.amount, template.frequency),
            account.currency,
            main_currency,
            rate_table,
        )
        name = template.payee or "Unknown"

        if template.type == EntryType.INFLOW:
            income += monthly_amount
            income_items.append(
                RecurringItem(
                    name=name,
                    amount=template.amount,
                    frequency=template.frequency,
                    monthly_amount=monthly_amount,
                    category=template.category,
                )
            )
        else:
            expenses += monthly_amount
            expense_items.append(
                RecurringItem(
                    name=name,
                    amount=template.amount,
                    frequency=template.frequency,
                    monthly_amount=monthly_amount,
                    category=template.category or "Uncategorized",
                )
            )

    by_amount = attrgetter("monthly_amount")
    return MonthlyRecurringTotals(
        income=income,
        expenses=expenses,
        income_items=tuple(sorted(income_items, key=by_amount, reverse=True)),
        expense_items=tuple(sorted(expense_items, key=by_amount, reverse=True)),
    )


class RecurringService:
    """Service for managing recurring templates."""

    def __init__(self, db: Database):
        """Initialize recurring service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_template(
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
        """Create a recurring template.

        Raises:
            NotFoundError: If the account does not exist
            ValidationError: If the amount is negative
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        if amount < 0:
            raise ValidationError("Amount cannot be negative")

        return self.db.create_recurring(
            account_id=account_id,
            type=EntryType(type),
            amount=amount,
            frequency=Frequency(frequency),
            next_due_date=next_due_date,
            payee=payee,
            category=category,
            notes=notes,
        )

    def get_template(self, template_id: int) -> Optional[RecurringTemplate]:
        return self.db.get_recurring(template_id)

    def list_templates(
        self, account_id: Optional[int] = None, active_only: bool = False
    ) -> list[RecurringTemplate]:
        return self.db.list_recurring(account_id=account_id, active_only=active_only)

    def set_active(self, template_id: int, is_active: bool) -> None:
        """Pause or resume a template."""
        if self.db.get_recurring(template_id) is None:
            raise NotFoundError(recurring_not_found(template_id))
        self.db.set_recurring_active(template_id, is_active)

    def delete_template(self, template_id: int) -> None:
        if self.db.get_recurring(template_id) is None:
            raise NotFoundError(recurring_not_found(template_id))
        self.db.delete_recurring(template_id)

    def list_due(self, as_of: date) -> list[RecurringTemplate]:
        """Active templates whose next due date is on or before ``as_of``."""
        return [
            t for t in self.db.list_recurring(active_only=True) if t.next_due_date <= as_of
        ]

    def get_monthly_totals(self, main_currency: str, rate_table: RateTable) -> MonthlyRecurringTotals:
        """Monthly totals over all active templates."""
        accounts = {account.id: account for account in self.db.list_accounts()}
        totals = calculate_monthly_recurring(
            self.db.list_recurring(active_only=True), accounts, main_currency, rate_table
        )
        logger.debug(
            "Recurring totals in %s: income %s, expenses %s",
            main_currency,
            totals.income,
            totals.expenses,
        )
        return totals

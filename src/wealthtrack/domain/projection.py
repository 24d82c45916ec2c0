"""Year-to-date and 12-month net worth projection.

The model is linear, not compounding: the monthly savings implied by the
active recurring templates are added to (or, looking back, subtracted from)
the liquid bank balance once per month. Investments, assets and debts are
held at their current values in every month of the series.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from dateutil.relativedelta import relativedelta

from wealthtrack.database.base import Database
from wealthtrack.domain.currency import round_currency
from wealthtrack.domain.entities import (
    AccountType,
    MonthlyData,
    MonthlyRecurringTotals,
    NetWorthSummary,
    ProjectionResult,
    ProjectionSummary,
)
from wealthtrack.domain.net_worth import NetWorthService
from wealthtrack.domain.recurring import RecurringService
from wealthtrack.domain.settings import SettingsService

logger = logging.getLogger(__name__)

FUTURE_MONTHS = 12


def month_key(month: date) -> str:
    """Format a month as ``YYYY-MM``."""
    return month.strftime("%Y-%m")


def month_label(month: date) -> str:
    """Format a month as ``Jan 2026``."""
    return month.strftime("%b %Y")


def savings_rate(recurring: MonthlyRecurringTotals) -> Decimal:
    """Savings as a percentage of income, 0 without income."""
    if recurring.income > 0:
        return recurring.savings / recurring.income * 100
    return Decimal("0")


def project_month(
    net_worth: NetWorthSummary,
    recurring: MonthlyRecurringTotals,
    month: date,
    offset: int,
) -> MonthlyData:
    """Net worth ``offset`` months away from now (negative for the past).

    Only net worth, liquid assets and the bank subtotal move; every other
    figure is the current one.
    """
    change = offset * recurring.savings
    by_type = {t: round_currency(net_worth.type_total(t)) for t in AccountType}
    by_type[AccountType.BANK] = round_currency(net_worth.type_total(AccountType.BANK) + change)

    return MonthlyData(
        month=month_key(month),
        label=month_label(month),
        net_worth=round_currency(net_worth.total_net_worth + change),
        liquid_assets=round_currency(net_worth.liquid_assets + change),
        investments=round_currency(net_worth.investments),
        assets=round_currency(net_worth.assets),
        total_debt=round_currency(net_worth.total_debt),
        income=round_currency(recurring.income),
        expenses=round_currency(recurring.expenses),
        net_cash_flow=round_currency(recurring.savings),
        savings_rate=round_currency(savings_rate(recurring)),
        by_type=by_type,
    )


def generate_projection(
    net_worth: NetWorthSummary,
    recurring: MonthlyRecurringTotals,
    today: date,
) -> ProjectionResult:
    """Build the YTD and forward net worth series.

    Args:
        net_worth: Current net worth and breakdown in the main currency
        recurring: Monthly recurring totals in the same currency
        today: Any date in the current month

    Returns:
        ProjectionResult with January..current month in ``ytd`` and the next
        12 months in ``future``
    """
    current = today.replace(day=1)

    ytd = tuple(
        project_month(net_worth, recurring, date(current.year, m, 1), m - current.month)
        for m in range(1, current.month + 1)
    )
    future = tuple(
        project_month(net_worth, recurring, current + relativedelta(months=d), d)
        for d in range(1, FUTURE_MONTHS + 1)
    )

    months_to_year_end = 12 - current.month
    year_end = net_worth.total_net_worth + months_to_year_end * recurring.savings
    summary = ProjectionSummary(
        monthly_income=round_currency(recurring.income),
        monthly_expenses=round_currency(recurring.expenses),
        monthly_savings=round_currency(recurring.savings),
        savings_rate=round_currency(savings_rate(recurring)),
        projected_year_end_net_worth=round_currency(year_end),
        projected_net_worth_change=round_currency(year_end) - ytd[0].net_worth,
    )

    return ProjectionResult(
        main_currency=net_worth.main_currency,
        current_month=month_key(current),
        ytd=ytd,
        future=future,
        summary=summary,
        recurring_breakdown=recurring,
    )


class ProjectionService:
    """Service generating projections from stored data."""

    def __init__(self, db: Database):
        """Initialize projection service.

        Args:
            db: Database instance
        """
        self.db = db
        self.settings = SettingsService(db)

    def generate(self, today: Optional[date] = None) -> ProjectionResult:
        """Project net worth around the current month."""
        today = today or date.today()
        main_currency = self.settings.get_main_currency()
        net_worth = NetWorthService(self.db).get_summary()
        recurring = RecurringService(self.db).get_monthly_totals(
            main_currency, self.settings.get_rate_table()
        )
        logger.debug(
            "Projecting from %s with monthly savings %s", month_key(today), recurring.savings
        )
        return generate_projection(net_worth, recurring, today)

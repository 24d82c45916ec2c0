"""Monthly profit and loss over bank and cash ledgers."""

import logging
import re
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from dateutil.relativedelta import relativedelta

from wealthtrack.database.base import Database
from wealthtrack.domain.currency import RateTable, convert_currency, round_currency
from wealthtrack.domain.entities import (
    LIQUID_ACCOUNT_TYPES,
    Account,
    EntryType,
    LedgerEntry,
    MonthlyPnL,
    PnLMonthDetail,
    PnLSummary,
    TransactionDetail,
)
from wealthtrack.domain.errors import NotFoundError, ValidationError, account_not_found
from wealthtrack.domain.settings import SettingsService

logger = logging.getLogger(__name__)

MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


def parse_month(month: str) -> date:
    """Parse ``YYYY-MM`` into the first day of that month.

    Raises:
        ValidationError: If the string is not a valid month
    """
    match = MONTH_PATTERN.match(month.strip())
    if match is None:
        raise ValidationError(f"Invalid month '{month}'. Use YYYY-MM")
    year, month_num = int(match.group(1)), int(match.group(2))
    if not 1 <= month_num <= 12:
        raise ValidationError(f"Invalid month '{month}'. Use YYYY-MM")
    return date(year, month_num, 1)


def _counts_toward_pnl(entry: LedgerEntry, accounts: Mapping[int, Account]) -> bool:
    """Bank/cash entries that are not transfer legs."""
    # Transfer legs cancel out across accounts and would double count
    if entry.transfer_id is not None:
        return False
    account = accounts.get(entry.account_id)
    if account is None:
        raise NotFoundError(account_not_found(entry.account_id))
    return account.type in LIQUID_ACCOUNT_TYPES


def _to_main(
    entry: LedgerEntry, account: Account, main_currency: str, rate_table: RateTable
) -> Decimal:
    return convert_currency(entry.amount, account.currency, main_currency, rate_table)


def summarize_months(
    entries: Iterable[LedgerEntry],
    accounts: Mapping[int, Account],
    year: int,
    main_currency: str,
    rate_table: RateTable,
    today: date,
) -> PnLSummary:
    """Group a year's bank and cash entries into monthly income and expenses.

    Every month from January is listed, up to December for past years and
    up to the current month for the current year. Future years are empty.

    Args:
        entries: Ledger entries (any accounts, any dates)
        accounts: Accounts keyed by ID
        year: Calendar year to summarize
        main_currency: Reporting currency
        rate_table: Supplied exchange rates
        today: Reference date deciding the last month listed

    Returns:
        PnLSummary with one MonthlyPnL per month
    """
    monthly: dict[str, dict[str, Decimal]] = defaultdict(
        lambda: {"income": Decimal("0"), "expenses": Decimal("0"), "count": 0}
    )

    for entry in entries:
        if entry.date.year != year or not _counts_toward_pnl(entry, accounts):
            continue
        amount = _to_main(entry, accounts[entry.account_id], main_currency, rate_table)
        data = monthly[entry.date.strftime("%Y-%m")]
        if entry.type == EntryType.INFLOW:
            data["income"] += amount
        else:
            data["expenses"] += amount
        data["count"] += 1

    if year < today.year:
        last_month = 12
    elif year == today.year:
        last_month = today.month
    else:
        last_month = 0

    months = []
    for month_num in range(1, last_month + 1):
        month_start = date(year, month_num, 1)
        key = month_start.strftime("%Y-%m")
        data = monthly.get(key, {"income": Decimal("0"), "expenses": Decimal("0"), "count": 0})
        months.append(
            MonthlyPnL(
                month=key,
                label=month_start.strftime("%B %Y"),
                income=round_currency(data["income"]),
                expenses=round_currency(data["expenses"]),
                net=round_currency(data["income"] - data["expenses"]),
                transaction_count=data["count"],
            )
        )

    return PnLSummary(main_currency=main_currency, months=tuple(months))


def month_detail(
    entries: Iterable[LedgerEntry],
    accounts: Mapping[int, Account],
    month: str,
    main_currency: str,
    rate_table: RateTable,
) -> PnLMonthDetail:
    """Totals and converted entries of one month, newest entry first.

    Raises:
        ValidationError: If ``month`` is not ``YYYY-MM``
    """
    month_start = parse_month(month)
    income = Decimal("0")
    expenses = Decimal("0")
    details = []

    selected = [
        e
        for e in entries
        if (e.date.year, e.date.month) == (month_start.year, month_start.month)
        and _counts_toward_pnl(e, accounts)
    ]
    for entry in sorted(selected, key=lambda e: (e.date, e.id), reverse=True):
        account = accounts[entry.account_id]
        amount = _to_main(entry, account, main_currency, rate_table)
        if entry.type == EntryType.INFLOW:
            income += amount
        else:
            expenses += amount

        details.append(
            TransactionDetail(
                id=entry.id,
                date=entry.date,
                type=entry.type,
                amount=entry.amount,
                amount_in_main_currency=round_currency(amount),
                payee=entry.payee,
                category=entry.category,
                account_name=account.name,
                account_currency=account.currency,
                notes=entry.notes,
            )
        )

    return PnLMonthDetail(
        month=month_start.strftime("%Y-%m"),
        label=month_start.strftime("%B %Y"),
        main_currency=main_currency,
        income=round_currency(income),
        expenses=round_currency(expenses),
        net=round_currency(income - expenses),
        transactions=tuple(details),
    )


class PnLService:
    """Service for P&L reports over stored ledgers."""

    def __init__(self, db: Database):
        """Initialize P&L service.

        Args:
            db: Database instance
        """
        self.db = db
        self.settings = SettingsService(db)

    def _accounts(self) -> dict[int, Account]:
        return {account.id: account for account in self.db.list_accounts()}

    def get_monthly_summary(
        self, year: Optional[int] = None, today: Optional[date] = None
    ) -> PnLSummary:
        """Monthly P&L of a calendar year (default: the current year)."""
        today = today or date.today()
        year = year or today.year
        entries = self.db.list_entries(
            start_date=date(year, 1, 1), end_date=date(year, 12, 31)
        )
        logger.debug("Summarizing %d entries for %s", len(entries), year)
        return summarize_months(
            entries,
            self._accounts(),
            year,
            self.settings.get_main_currency(),
            self.settings.get_rate_table(),
            today,
        )

    def get_month_detail(self, month: str) -> PnLMonthDetail:
        """Individual converted entries of one ``YYYY-MM`` month."""
        month_start = parse_month(month)
        month_end = month_start + relativedelta(months=1, days=-1)
        entries = self.db.list_entries(start_date=month_start, end_date=month_end)
        return month_detail(
            entries,
            self._accounts(),
            month,
            self.settings.get_main_currency(),
            self.settings.get_rate_table(),
        )

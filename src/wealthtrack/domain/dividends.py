"""Dividend payments and withholding tax."""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from wealthtrack.database.base import Database
from wealthtrack.domain.cost_basis import replay_holding
from wealthtrack.domain.currency import round_currency
from wealthtrack.domain.entities import AccountType, Dividend, DividendTax, DividendTaxSummary
from wealthtrack.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_not_found,
)
from wealthtrack.domain.settings import SettingsService

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def validate_tax_rate(tax_rate: Decimal) -> Decimal:
    if tax_rate < 0 or tax_rate > 1:
        raise ValidationError("Tax rate must be between 0 and 1")
    return tax_rate


def calculate_dividend_tax(
    amount_per_share: Decimal, shares: Decimal, tax_rate: Decimal
) -> DividendTax:
    """Split a dividend into gross, withheld tax and net.

    Args:
        amount_per_share: Dividend paid per share
        shares: Shares held on the ex-date
        tax_rate: Withholding rate between 0 and 1

    Returns:
        DividendTax with amounts rounded to cents

    Raises:
        ValidationError: If the tax rate is outside [0, 1]
    """
    validate_tax_rate(tax_rate)
    gross = round_currency(amount_per_share * shares)
    tax = round_currency(gross * tax_rate)
    return DividendTax(
        gross_amount=gross,
        tax_rate=tax_rate,
        tax_amount=tax,
        net_amount=gross - tax,
    )


def dividend_year(dividend: Dividend) -> int:
    """Tax year of a dividend: the pay date's year, else the ex-date's."""
    return (dividend.pay_date or dividend.ex_date).year


def summarize_dividend_taxes(
    dividends: Iterable[Dividend],
    year: Optional[int] = None,
    account_id: Optional[int] = None,
) -> list[DividendTaxSummary]:
    """Total gross, tax and net dividends per year, newest year first."""
    totals: dict[int, dict[str, Decimal]] = {}
    for dividend in dividends:
        if account_id is not None and dividend.account_id != account_id:
            continue
        tax_year = dividend_year(dividend)
        if year is not None and tax_year != year:
            continue
        data = totals.setdefault(
            tax_year, {"gross": ZERO, "tax": ZERO, "net": ZERO, "count": 0}
        )
        data["gross"] += dividend.amount
        data["tax"] += dividend.tax_amount
        data["net"] += dividend.net_amount
        data["count"] += 1

    return [
        DividendTaxSummary(
            year=y,
            total_gross=round_currency(data["gross"]),
            total_tax=round_currency(data["tax"]),
            total_net=round_currency(data["net"]),
            count=data["count"],
        )
        for y, data in sorted(totals.items(), reverse=True)
    ]


class DividendService:
    """Service for recording dividends."""

    def __init__(self, db: Database):
        """Initialize dividend service.

        Args:
            db: Database instance
        """
        self.db = db
        self.settings = SettingsService(db)

    def record_dividend(
        self,
        account_id: int,
        symbol: str,
        amount_per_share: Decimal,
        ex_date: date,
        pay_date: Optional[date] = None,
        shares_held: Optional[Decimal] = None,
        tax_rate: Optional[Decimal] = None,
    ) -> int:
        """Record a dividend payment with its withholding tax.

        Args:
            account_id: Stock account ID
            symbol: Ticker symbol (case-insensitive)
            amount_per_share: Dividend per share, must be positive
            ex_date: Ex-dividend date
            pay_date: Payment date, if known
            shares_held: Shares held; defaults to the position on the ex-date
            tax_rate: Withholding rate; defaults to the stored setting

        Returns:
            Dividend ID

        Raises:
            NotFoundError: If the account does not exist
            ValidationError: On a non-stock account, invalid amounts, or when no
                shares were held on the ex-date
            ConflictError: If the dividend is already recorded
        """
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        if account.type != AccountType.STOCK:
            raise ValidationError(f"Account {account_id} is not a stock account")

        symbol = symbol.strip().upper()
        if amount_per_share <= ZERO:
            raise ValidationError("Dividend per share must be positive")

        if shares_held is None:
            trades = [
                t
                for t in self.db.list_stock_transactions(account_id=account_id, symbol=symbol)
                if t.date <= ex_date
            ]
            shares_held = replay_holding(trades).shares
        if shares_held <= ZERO:
            raise ValidationError(f"No {symbol} shares held on {ex_date.isoformat()}")

        if tax_rate is None:
            tax_rate = self.settings.get_dividend_tax_rate()
        tax = calculate_dividend_tax(amount_per_share, shares_held, tax_rate)

        for existing in self.db.list_dividends(account_id=account_id):
            if existing.symbol == symbol and existing.ex_date == ex_date:
                raise ConflictError(
                    f"Dividend for {symbol} with ex-date {ex_date.isoformat()} already recorded"
                )

        dividend_id = self.db.create_dividend(
            account_id=account_id,
            symbol=symbol,
            amount=tax.gross_amount,
            shares_held=shares_held,
            ex_date=ex_date,
            pay_date=pay_date,
            tax_rate=tax.tax_rate,
            tax_amount=tax.tax_amount,
            net_amount=tax.net_amount,
        )
        logger.info(
            "Recorded %s dividend in account %s: gross %s, tax %s",
            symbol,
            account_id,
            tax.gross_amount,
            tax.tax_amount,
        )
        return dividend_id

    def list_dividends(self, account_id: Optional[int] = None) -> list[Dividend]:
        return self.db.list_dividends(account_id=account_id)

    def delete_dividend(self, dividend_id: int) -> None:
        self.db.delete_dividend(dividend_id)

    def get_tax_summary(
        self, year: Optional[int] = None, account_id: Optional[int] = None
    ) -> list[DividendTaxSummary]:
        """Yearly dividend tax totals."""
        return summarize_dividend_taxes(
            self.db.list_dividends(), year=year, account_id=account_id
        )

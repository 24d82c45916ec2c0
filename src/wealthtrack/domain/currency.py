"""Currency conversion over a supplied rate table."""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Mapping

from wealthtrack.domain.errors import UnknownCurrencyError, ValidationError

CENT = Decimal("0.01")
MICRO = Decimal("0.000001")


def normalize_currency(currency: str) -> str:
    """Normalize a currency code to upper case without surrounding whitespace."""
    return currency.strip().upper()


@dataclass(frozen=True)
class RateTable:
    """Exchange rates anchored to one base currency.

    ``rates[c]`` is the value of one unit of ``c`` expressed in the base
    currency, so the base currency itself always has rate 1.
    """

    base_currency: str
    rates: Mapping[str, Decimal] = field(default_factory=dict)

    def __post_init__(self) -> None:
        base = normalize_currency(self.base_currency)
        rates = {normalize_currency(code): Decimal(rate) for code, rate in self.rates.items()}
        for code, rate in rates.items():
            if rate <= 0:
                raise ValidationError(f"Exchange rate for {code} must be positive")
        rates.setdefault(base, Decimal("1"))
        object.__setattr__(self, "base_currency", base)
        object.__setattr__(self, "rates", rates)

    def rate_for(self, currency: str) -> Decimal:
        code = normalize_currency(currency)
        try:
            return self.rates[code]
        except KeyError:
            raise UnknownCurrencyError(code) from None

    def __contains__(self, currency: str) -> bool:
        return normalize_currency(currency) in self.rates


def convert_currency(
    amount: Decimal, source: str, target: str, rate_table: RateTable
) -> Decimal:
    """Convert an amount between two currencies.

    Args:
        amount: Amount in the source currency
        source: Source currency code
        target: Target currency code
        rate_table: Rates relative to the table's base currency

    Returns:
        Unrounded amount in the target currency

    Raises:
        UnknownCurrencyError: If either currency is missing from the table
    """
    if normalize_currency(source) == normalize_currency(target):
        return amount

    amount_in_base = amount * rate_table.rate_for(source)
    return amount_in_base / rate_table.rate_for(target)


def round_currency(amount: Decimal) -> Decimal:
    """Round a fiat amount to cents."""
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def round_quantity(amount: Decimal) -> Decimal:
    """Round a share count or per-share price to six decimal places."""
    return Decimal(amount).quantize(MICRO, rounding=ROUND_HALF_UP)

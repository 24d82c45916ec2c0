"""Settings domain service: main currency, exchange rates, dividend tax rate."""

import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from wealthtrack.database.base import Database
from wealthtrack.domain.currency import RateTable, normalize_currency
from wealthtrack.domain.errors import ValidationError

logger = logging.getLogger(__name__)

MAIN_CURRENCY_KEY = "main_currency"
BASE_CURRENCY_KEY = "base_currency"
DIVIDEND_TAX_RATE_KEY = "dividend_tax_rate"

DEFAULT_MAIN_CURRENCY = "EUR"
DEFAULT_BASE_CURRENCY = "EUR"
DEFAULT_DIVIDEND_TAX_RATE = Decimal("0.30")

# Matches the exchange_rates.rate column scale
RATE_QUANTUM = Decimal("0.00000001")


def validate_currency_code(currency: str) -> str:
    """Return a normalized three-letter currency code.

    Raises:
        ValidationError: If the code is not three letters
    """
    code = normalize_currency(currency)
    if len(code) != 3 or not code.isalpha():
        raise ValidationError(f"Invalid currency code '{currency}'")
    return code


class SettingsService:
    """Service for per-database settings and the supplied rate table."""

    def __init__(self, db: Database):
        """Initialize settings service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_main_currency(self) -> str:
        return self.db.get_setting(MAIN_CURRENCY_KEY) or DEFAULT_MAIN_CURRENCY

    def set_main_currency(self, currency: str) -> str:
        """Select the reporting currency.

        Raises:
            ValidationError: If the code is malformed or has no exchange rate
        """
        code = validate_currency_code(currency)
        if code not in self.get_rate_table():
            raise ValidationError(
                f"Cannot use {code} as main currency: no exchange rate is set for it"
            )
        self.db.set_setting(MAIN_CURRENCY_KEY, code)
        logger.info("Main currency set to %s", code)
        return code

    def get_base_currency(self) -> str:
        return self.db.get_setting(BASE_CURRENCY_KEY) or DEFAULT_BASE_CURRENCY

    def set_base_currency(self, currency: str) -> str:
        """Change the currency that stored rates are expressed in.

        Every rate, including the old base's implicit 1, is rescaled to
        ``rate[c] / rate[new_base]`` and stored together with the new base,
        so conversions give the same results before and after.

        Raises:
            ValidationError: If the code is malformed or has no exchange rate
        """
        code = validate_currency_code(currency)
        table = self.get_rate_table()
        if code == table.base_currency:
            return code
        if code not in table:
            raise ValidationError(
                f"Cannot use {code} as base currency: no exchange rate is set for it"
            )

        new_base_rate = table.rate_for(code)
        rates = {
            c: (rate / new_base_rate).quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP)
            for c, rate in table.rates.items()
        }
        rates[code] = Decimal("1")
        self.db.replace_exchange_rates(rates, settings={BASE_CURRENCY_KEY: code})
        logger.info("Base currency changed from %s to %s", table.base_currency, code)
        return code

    def get_rate_table(self) -> RateTable:
        """Build the rate table from stored rates."""
        return RateTable(
            base_currency=self.get_base_currency(),
            rates=self.db.list_exchange_rates(),
        )

    def set_exchange_rate(self, currency: str, rate: Decimal) -> None:
        """Store the value of one unit of ``currency`` in the base currency.

        Raises:
            ValidationError: If the rate is not positive or the base rate is changed
        """
        code = validate_currency_code(currency)
        if rate <= 0:
            raise ValidationError(f"Exchange rate for {code} must be positive")
        if code == self.get_base_currency() and rate != 1:
            raise ValidationError(f"Base currency {code} always has rate 1")
        self.db.set_exchange_rate(code, rate)
        logger.info("Exchange rate %s = %s %s", code, rate, self.get_base_currency())

    def remove_exchange_rate(self, currency: str) -> None:
        code = validate_currency_code(currency)
        if code in (self.get_base_currency(), self.get_main_currency()):
            raise ValidationError(f"Cannot remove the rate for {code} while it is in use")
        self.db.delete_exchange_rate(code)

    def get_dividend_tax_rate(self) -> Decimal:
        stored = self.db.get_setting(DIVIDEND_TAX_RATE_KEY)
        if stored is None:
            return DEFAULT_DIVIDEND_TAX_RATE
        return Decimal(stored)

    def set_dividend_tax_rate(self, rate: Decimal) -> None:
        """Store the default dividend withholding rate.

        Raises:
            ValidationError: If the rate is outside [0, 1]
        """
        try:
            value = Decimal(rate)
        except (InvalidOperation, TypeError) as e:
            raise ValidationError(f"Invalid tax rate '{rate}'") from e
        if value < 0 or value > 1:
            raise ValidationError("Tax rate must be between 0 and 1")
        self.db.set_setting(DIVIDEND_TAX_RATE_KEY, str(value))

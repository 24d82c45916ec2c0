"""Text rendering helpers shared by commands."""

from decimal import Decimal


def format_money(amount: Decimal, currency: str | None = None) -> str:
    """Format an amount with thousands separators and two decimals."""
    text = f"{amount:,.2f}"
    return f"{text} {currency}" if currency else text


def format_quantity(quantity: Decimal) -> str:
    """Format a share count without trailing zeros."""
    text = f"{quantity:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text

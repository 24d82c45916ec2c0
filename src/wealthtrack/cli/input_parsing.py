"""CLI helpers for parsing dates and amounts from options."""

from datetime import date
from decimal import Decimal

import click

from wealthtrack.cli.error_handling import exit_with_error
from wealthtrack.utils.amount_parser import parse_amount
from wealthtrack.utils.date_parser import parse_date


def parse_date_or_exit(ctx: click.Context, value: str | None, label: str = "date") -> date:
    """Parse a CLI date (default: today), or exit with a CLI error."""
    if value is None:
        return date.today()
    try:
        return parse_date(value)
    except ValueError as e:
        exit_with_error(ctx, f"Invalid {label}: {e}")


def parse_optional_date_or_exit(
    ctx: click.Context, value: str | None, label: str = "date"
) -> date | None:
    if value is None:
        return None
    return parse_date_or_exit(ctx, value, label)


def parse_amount_or_exit(ctx: click.Context, value: str, label: str = "amount") -> Decimal:
    """Parse a CLI amount, or exit with a CLI error."""
    try:
        return parse_amount(value)
    except ValueError as e:
        exit_with_error(ctx, f"Invalid {label}: {e}")

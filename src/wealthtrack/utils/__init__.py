"""Utility functions for wealthtrack."""

from wealthtrack.utils.date_parser import parse_date
from wealthtrack.utils.amount_parser import parse_amount
from wealthtrack.utils.account_resolver import resolve_account

__all__ = ["parse_date", "parse_amount", "resolve_account"]

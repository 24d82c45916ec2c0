"""Resolve ACCOUNT arguments given as a name or an ID."""

from __future__ import annotations

import click
from wealthtrack.cli.error_handling import exit_with_error
from wealthtrack.domain.account import AccountService
from wealthtrack.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str | int
) -> int:
    """Return the account ID, or report the lookup error and exit with status 1."""
    try:
        return resolve_account(account_service, account)
    except ValueError as exc:
        exit_with_error(ctx, str(exc))

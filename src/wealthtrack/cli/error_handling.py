"""Error reporting shared by CLI commands."""

import click

from wealthtrack.domain.errors import UnknownCurrencyError


def exit_with_error(ctx: click.Context, message: str) -> None:
    """Print ``Error: <message>`` to stderr and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    ctx.exit(1)


def handle_domain_error(ctx: click.Context, error: ValueError) -> None:
    """Report a failed service call, pointing at ``rates set`` for unknown currencies."""
    message = str(error)
    if isinstance(error, UnknownCurrencyError):
        message = f"{message}. Add one with: wealthtrack rates set {error.currency} RATE"
    exit_with_error(ctx, message)

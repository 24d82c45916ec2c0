"""Main CLI entry point."""

import click
from wealthtrack.cli.error_handling import exit_with_error
from wealthtrack.database.factories import DB_PATH_ENV_VAR, create_sqlite_database
from wealthtrack.utils.logging_config import resolve_log_level, setup_logging

# Import and register all commands at module level
from wealthtrack.cli.commands import (
    account,
    entry,
    transfer,
    recurring,
    stock,
    dividend,
    rates,
    networth,
    projection,
    pnl,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV_VAR} environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Wealthtrack - Multi-currency net worth tracking.

    Record balances, trades, recurring income and expenses across accounts
    in any currency, and view net worth, projections and monthly P&L in your
    main currency.
    """
    ctx.ensure_object(dict)

    try:
        setup_logging(resolve_log_level(verbose))
    except ValueError as e:
        exit_with_error(ctx, str(e))

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
entry.register_commands(cli)
transfer.register_commands(cli)
recurring.register_commands(cli)
stock.register_commands(cli)
dividend.register_commands(cli)
rates.register_commands(cli)
networth.register_commands(cli)
projection.register_commands(cli)
pnl.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

"""Monthly profit and loss commands."""

import click
from wealthtrack.cli.display import format_money
from wealthtrack.cli.error_handling import handle_domain_error
from wealthtrack.domain.entities import EntryType
from wealthtrack.domain.pnl import PnLService


@click.group()
def pnl_group():
    """Monthly income and expenses from bank and cash accounts."""
    pass


@pnl_group.command("summary")
@click.option("--year", type=int, help="Calendar year (defaults to the current year)")
@click.pass_context
def pnl_summary(ctx, year: int | None) -> None:
    """Show income, expenses and net per month of a year.

    Transfers between accounts are not counted.
    """
    try:
        summary = PnLService(ctx.obj["db"]).get_monthly_summary(year=year)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not summary.months:
        click.echo("No months to show.")
        return

    click.echo(f"P&L in {summary.main_currency}")
    click.echo(f"{'Month':16s} {'Income':>14s} {'Expenses':>14s} {'Net':>14s} {'Entries':>8s}")
    for m in summary.months:
        click.echo(
            f"{m.label:16s} {format_money(m.income):>14s} {format_money(m.expenses):>14s} "
            f"{format_money(m.net):>14s} {m.transaction_count:>8d}"
        )


@pnl_group.command("month")
@click.argument("month", metavar="YYYY-MM")
@click.pass_context
def pnl_month(ctx, month: str) -> None:
    """Show the entries of one month converted to the main currency."""
    try:
        detail = PnLService(ctx.obj["db"]).get_month_detail(month)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    currency = detail.main_currency
    click.echo(f"{detail.label}")
    click.echo(f"  Income:   {format_money(detail.income, currency)}")
    click.echo(f"  Expenses: {format_money(detail.expenses, currency)}")
    click.echo(f"  Net:      {format_money(detail.net, currency)}")

    if not detail.transactions:
        click.echo("\nNo entries.")
        return

    click.echo()
    for t in detail.transactions:
        sign = "+" if t.type == EntryType.INFLOW else "-"
        click.echo(
            f"{t.date.isoformat()} | {t.account_name:15s} | "
            f"{sign}{format_money(t.amount, t.account_currency):>16s} | "
            f"{sign}{format_money(t.amount_in_main_currency, currency):>16s} | "
            f"{t.payee or '':15s} | {t.category or ''}"
        )


def register_commands(cli):
    """Register P&L commands with main CLI."""
    cli.add_command(pnl_group, name="pnl")

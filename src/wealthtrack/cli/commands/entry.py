"""Ledger entry commands."""

import click
from wealthtrack.cli.account_resolution import resolve_account_or_exit
from wealthtrack.cli.display import format_money
from wealthtrack.cli.error_handling import handle_domain_error
from wealthtrack.cli.input_parsing import (
    parse_amount_or_exit,
    parse_date_or_exit,
    parse_optional_date_or_exit,
)
from wealthtrack.domain.account import AccountService
from wealthtrack.domain.entities import EntryType


@click.group()
def entry_group():
    """Record inflows and outflows."""
    pass


@entry_group.command("add")
@click.argument("account", metavar="ACCOUNT")
@click.argument("entry_type", metavar="TYPE", type=click.Choice([t.value for t in EntryType]))
@click.argument("amount", metavar="AMOUNT")
@click.option("--date", "entry_date", help="Entry date (YYYY-MM-DD or relative like 'today')")
@click.option("--payee", help="Payee or payer")
@click.option("--category", help="Category")
@click.option("--notes", help="Notes")
@click.pass_context
def add_entry(
    ctx,
    account: str,
    entry_type: str,
    amount: str,
    entry_date: str | None,
    payee: str | None,
    category: str | None,
    notes: str | None,
) -> None:
    """Add a ledger entry to an account.

    Examples:
        wealthtrack entry add Checking inflow 3000 --payee Employer --category Salary
        wealthtrack entry add 1 outflow 54.20 --date yesterday --category Groceries
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account)
    value = parse_amount_or_exit(ctx, amount)
    when = parse_date_or_exit(ctx, entry_date)

    try:
        entry_id = service.add_entry(
            account_id=account_id,
            type=EntryType(entry_type),
            amount=value,
            date=when,
            payee=payee,
            category=category,
            notes=notes,
        )
        click.echo(f"Added {entry_type} of {format_money(value)} (ID: {entry_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@entry_group.command("list")
@click.option("--account", help="Account name or ID")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.pass_context
def list_entries(ctx, account: str | None, start_date: str | None, end_date: str | None) -> None:
    """List ledger entries, newest first."""
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account) if account else None
    start = parse_optional_date_or_exit(ctx, start_date, "start date")
    end = parse_optional_date_or_exit(ctx, end_date, "end date")

    entries = service.list_entries(account_id=account_id, start_date=start, end_date=end)
    if not entries:
        click.echo("No entries found.")
        return

    accounts = {acc.id: acc for acc in service.list_accounts()}
    for e in entries:
        acc = accounts[e.account_id]
        sign = "+" if e.type == EntryType.INFLOW else "-"
        marker = f" [transfer {e.transfer_id}]" if e.transfer_id else ""
        click.echo(
            f"{e.id:5d} | {e.date.isoformat()} | {acc.name:15s} | "
            f"{sign}{format_money(e.amount, acc.currency):>18s} | "
            f"{e.payee or '':15s} | {e.category or ''}{marker}"
        )


@entry_group.command("delete")
@click.argument("entry_id", type=int)
@click.pass_context
def delete_entry(ctx, entry_id: int) -> None:
    """Delete a ledger entry. Transfer legs are deleted with their transfer."""
    db = ctx.obj["db"]
    service = AccountService(db)

    try:
        service.delete_entry(entry_id)
        click.echo(f"Deleted entry {entry_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")

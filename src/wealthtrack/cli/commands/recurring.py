"""Recurring transaction commands."""

import click
from wealthtrack.cli.account_resolution import resolve_account_or_exit
from wealthtrack.cli.display import format_money
from wealthtrack.cli.error_handling import handle_domain_error
from wealthtrack.cli.input_parsing import parse_amount_or_exit, parse_date_or_exit
from wealthtrack.domain.account import AccountService
from wealthtrack.domain.entities import EntryType, Frequency, RecurringTemplate
from wealthtrack.domain.recurring import RecurringService


@click.group()
def recurring_group():
    """Manage recurring income and expenses."""
    pass


def _echo_templates(templates: list[RecurringTemplate], accounts: dict) -> None:
    for t in templates:
        acc = accounts[t.account_id]
        status = "active" if t.is_active else "paused"
        click.echo(
            f"{t.id:4d} | {t.type.value:7s} | {format_money(t.amount, acc.currency):>16s} | "
            f"{t.frequency.value:8s} | next {t.next_due_date.isoformat()} | {acc.name:15s} | "
            f"{t.payee or 'Unknown':15s} | {status}"
        )


@recurring_group.command("add")
@click.argument("account", metavar="ACCOUNT")
@click.argument("entry_type", metavar="TYPE", type=click.Choice([t.value for t in EntryType]))
@click.argument("amount", metavar="AMOUNT")
@click.option(
    "--frequency",
    type=click.Choice([f.value for f in Frequency]),
    default="monthly",
    show_default=True,
)
@click.option("--next-due", help="Next due date (defaults to today)")
@click.option("--payee", help="Payee or payer")
@click.option("--category", help="Category")
@click.option("--notes", help="Notes")
@click.pass_context
def add_recurring(
    ctx,
    account: str,
    entry_type: str,
    amount: str,
    frequency: str,
    next_due: str | None,
    payee: str | None,
    category: str | None,
    notes: str | None,
) -> None:
    """Add a recurring income or expense.

    Examples:
        wealthtrack recurring add Checking inflow 3000 --payee Employer
        wealthtrack recurring add Checking outflow 120 --frequency yearly --payee Insurance
    """
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)
    value = parse_amount_or_exit(ctx, amount)
    due = parse_date_or_exit(ctx, next_due, "next due date")

    try:
        template_id = RecurringService(db).create_template(
            account_id=account_id,
            type=EntryType(entry_type),
            amount=value,
            frequency=Frequency(frequency),
            next_due_date=due,
            payee=payee,
            category=category,
            notes=notes,
        )
        click.echo(f"Added recurring {entry_type} (ID: {template_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@recurring_group.command("list")
@click.option("--account", help="Account name or ID")
@click.option("--active-only", is_flag=True, help="Hide paused templates")
@click.pass_context
def list_recurring(ctx, account: str | None, active_only: bool) -> None:
    """List recurring templates."""
    db = ctx.obj["db"]
    account_service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, account_service, account) if account else None

    templates = RecurringService(db).list_templates(account_id=account_id, active_only=active_only)
    if not templates:
        click.echo("No recurring transactions found.")
        return
    _echo_templates(templates, {acc.id: acc for acc in account_service.list_accounts()})


def _set_active(ctx, template_id: int, is_active: bool) -> None:
    try:
        RecurringService(ctx.obj["db"]).set_active(template_id, is_active)
        click.echo(f"{'Resumed' if is_active else 'Paused'} recurring transaction {template_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@recurring_group.command("pause")
@click.argument("template_id", type=int)
@click.pass_context
def pause_recurring(ctx, template_id: int) -> None:
    """Pause a recurring template so it no longer counts toward projections."""
    _set_active(ctx, template_id, False)


@recurring_group.command("resume")
@click.argument("template_id", type=int)
@click.pass_context
def resume_recurring(ctx, template_id: int) -> None:
    """Resume a paused recurring template."""
    _set_active(ctx, template_id, True)


@recurring_group.command("delete")
@click.argument("template_id", type=int)
@click.pass_context
def delete_recurring(ctx, template_id: int) -> None:
    """Delete a recurring template."""
    try:
        RecurringService(ctx.obj["db"]).delete_template(template_id)
        click.echo(f"Deleted recurring transaction {template_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@recurring_group.command("due")
@click.option("--as-of", help="Reference date (defaults to today)")
@click.pass_context
def due_recurring(ctx, as_of: str | None) -> None:
    """List active templates due on or before a date."""
    db = ctx.obj["db"]
    when = parse_date_or_exit(ctx, as_of)

    templates = RecurringService(db).list_due(when)
    if not templates:
        click.echo(f"Nothing due as of {when.isoformat()}.")
        return
    _echo_templates(templates, {acc.id: acc for acc in AccountService(db).list_accounts()})


def register_commands(cli):
    """Register recurring commands with main CLI."""
    cli.add_command(recurring_group, name="recurring")

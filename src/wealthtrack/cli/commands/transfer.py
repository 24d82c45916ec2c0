"""Transfer commands."""

import click
from wealthtrack.cli.account_resolution import resolve_account_or_exit
from wealthtrack.cli.display import format_money
from wealthtrack.cli.error_handling import handle_domain_error
from wealthtrack.cli.input_parsing import parse_amount_or_exit, parse_date_or_exit
from wealthtrack.domain.account import AccountService
from wealthtrack.domain.transfer import TransferService


@click.group()
def transfer_group():
    """Move money between accounts."""
    pass


@transfer_group.command("create")
@click.argument("from_account", metavar="FROM_ACCOUNT")
@click.argument("to_account", metavar="TO_ACCOUNT")
@click.argument("amount", metavar="AMOUNT")
@click.option(
    "--to-amount", help="Amount received in the destination currency (required across currencies)"
)
@click.option("--date", "transfer_date", help="Transfer date (defaults to today)")
@click.option("--notes", help="Notes copied onto both ledger entries")
@click.pass_context
def create_transfer(
    ctx,
    from_account: str,
    to_account: str,
    amount: str,
    to_amount: str | None,
    transfer_date: str | None,
    notes: str | None,
) -> None:
    """Transfer AMOUNT from one account to another.

    Examples:
        wealthtrack transfer create Checking Savings 500
        wealthtrack transfer create Checking "USD Account" 1000 --to-amount 1085.50
    """
    db = ctx.obj["db"]
    account_service = AccountService(db)
    service = TransferService(db)

    from_id = resolve_account_or_exit(ctx, account_service, from_account)
    to_id = resolve_account_or_exit(ctx, account_service, to_account)
    from_value = parse_amount_or_exit(ctx, amount)
    to_value = parse_amount_or_exit(ctx, to_amount, "to-amount") if to_amount else None
    when = parse_date_or_exit(ctx, transfer_date)

    try:
        transfer_id = service.create_transfer(
            from_account_id=from_id,
            to_account_id=to_id,
            from_amount=from_value,
            to_amount=to_value,
            date=when,
            notes=notes,
        )
        click.echo(f"Created transfer {transfer_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@transfer_group.command("list")
@click.pass_context
def list_transfers(ctx) -> None:
    """List transfers, newest first."""
    db = ctx.obj["db"]
    service = TransferService(db)
    accounts = {acc.id: acc for acc in AccountService(db).list_accounts()}

    transfers = service.list_transfers()
    if not transfers:
        click.echo("No transfers found.")
        return

    for t in transfers:
        source = accounts[t.from_account_id]
        destination = accounts[t.to_account_id]
        click.echo(
            f"{t.id:4d} | {t.date.isoformat()} | {source.name} -> {destination.name} | "
            f"{format_money(t.from_amount, source.currency)} -> "
            f"{format_money(t.to_amount, destination.currency)}"
            f"{' | ' + t.notes if t.notes else ''}"
        )


@transfer_group.command("delete")
@click.argument("transfer_id", type=int)
@click.pass_context
def delete_transfer(ctx, transfer_id: int) -> None:
    """Delete a transfer and both of its ledger entries."""
    db = ctx.obj["db"]
    service = TransferService(db)

    try:
        service.delete_transfer(transfer_id)
        click.echo(f"Deleted transfer {transfer_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register transfer commands with main CLI."""
    cli.add_command(transfer_group, name="transfer")

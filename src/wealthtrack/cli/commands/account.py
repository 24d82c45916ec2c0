"""Account management commands."""

import click
from wealthtrack.cli.account_resolution import resolve_account_or_exit
from wealthtrack.cli.display import format_money
from wealthtrack.cli.error_handling import handle_domain_error
from wealthtrack.cli.input_parsing import parse_amount_or_exit
from wealthtrack.domain.account import AccountService
from wealthtrack.domain.balance import BalanceService
from wealthtrack.domain.entities import AccountType

ACCOUNT_TYPES = [t.value for t in AccountType]


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type", "account_type", type=click.Choice(ACCOUNT_TYPES), default="bank", show_default=True
)
@click.option("--currency", default="EUR", show_default=True, help="Three-letter currency code")
@click.option(
    "--initial-balance",
    default="0",
    help="Opening balance (credit limit for credit accounts, value for asset accounts)",
)
@click.option("--favorite", is_flag=True, help="Pin the account to the top of lists")
@click.pass_context
def create_account(
    ctx, name: str, account_type: str, currency: str, initial_balance: str, favorite: bool
):
    """Create a new account.

    Examples:
        wealthtrack account create "Checking" --currency EUR --initial-balance 1000
        wealthtrack account create "Visa" --type credit --initial-balance 5000
        wealthtrack account create "Brokerage" --type stock --currency USD
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    amount = parse_amount_or_exit(ctx, initial_balance, "initial balance")

    try:
        account_id = service.create_account(
            name=name,
            type=AccountType(account_type),
            currency=currency,
            initial_balance=amount,
            is_favorite=favorite,
        )
        click.echo(f"Created {account_type} account '{name}' (ID: {account_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        star = "*" if acc.is_favorite else " "
        click.echo(
            f"{star} ID: {acc.id:3d} | {acc.name:20s} | {acc.type.value:6s} | {acc.currency}"
        )


@account_group.command("rename")
@click.argument("account", metavar="ACCOUNT")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_account(ctx, account: str, new_name: str) -> None:
    """Rename an account.

    ACCOUNT can be an account name or ID.

    Examples:
        wealthtrack account rename "Checking" "Main Checking"
        wealthtrack account rename 1 "Savings"
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account)

    try:
        service.rename_account(account_id=account_id, name=new_name)
        click.echo(f"Renamed account to '{new_name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


@account_group.command("favorite")
@click.argument("account", metavar="ACCOUNT")
@click.option("--off", is_flag=True, help="Remove the favorite mark instead")
@click.pass_context
def favorite_account(ctx, account: str, off: bool) -> None:
    """Mark or unmark an account as favorite."""
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account)

    try:
        service.set_favorite(account_id, not off)
        click.echo(f"Account {account_id} {'unmarked' if off else 'marked'} as favorite")
    except ValueError as e:
        handle_domain_error(ctx, e)


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    The account can only be deleted if it has no ledger entries or stock
    trades. Delete them first.

    Examples:
        wealthtrack account delete "Old Savings"
        wealthtrack account delete 3 --yes
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
        click.echo(f"Deleted account '{account_obj.name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


@account_group.command("balance")
@click.argument("account", metavar="ACCOUNT", required=False)
@click.pass_context
def account_balance(ctx, account: str | None) -> None:
    """Show current balances in each account's own currency.

    Shows all accounts when ACCOUNT is omitted.
    """
    db = ctx.obj["db"]
    account_service = AccountService(db)
    balance_service = BalanceService(db)
    names = {acc.id: acc.name for acc in account_service.list_accounts()}

    try:
        if account is not None:
            account_id = resolve_account_or_exit(ctx, account_service, account)
            balances = [balance_service.get_account_balance(account_id)]
        else:
            balances = balance_service.list_account_balances()
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not balances:
        click.echo("No accounts found.")
        return

    for bal in balances:
        click.echo(
            f"{names[bal.account_id]:20s} | {bal.type.value:6s} | "
            f"{format_money(bal.balance, bal.currency):>20s}"
        )


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")

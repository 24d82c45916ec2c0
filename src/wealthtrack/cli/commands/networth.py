"""Net worth command."""

import click
from wealthtrack.cli.display import format_money
from wealthtrack.cli.error_handling import handle_domain_error
from wealthtrack.domain.entities import AccountType
from wealthtrack.domain.net_worth import NetWorthService


@click.command("networth")
@click.option("--accounts", "show_accounts", is_flag=True, help="List each account's contribution")
@click.pass_context
def networth(ctx, show_accounts: bool) -> None:
    """Show net worth in the main currency, broken down by account type."""
    try:
        summary = NetWorthService(ctx.obj["db"]).get_summary()
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    currency = summary.main_currency
    click.echo(f"\nNet worth: {format_money(summary.total_net_worth, currency)}")
    click.echo("-" * 50)
    for account_type in AccountType:
        total = summary.by_type[account_type]
        if total.count == 0:
            continue
        click.echo(
            f"{account_type.value.capitalize():10s} {total.count:3d} account(s) "
            f"{format_money(total.total, currency):>22s}"
        )
    click.echo("-" * 50)
    click.echo(f"{'Liquid assets':24s} {format_money(summary.liquid_assets, currency):>22s}")
    click.echo(f"{'Investments':24s} {format_money(summary.investments, currency):>22s}")
    click.echo(f"{'Assets':24s} {format_money(summary.assets, currency):>22s}")
    click.echo(f"{'Debt':24s} {format_money(summary.total_debt, currency):>22s}")

    if show_accounts:
        click.echo("\nAccounts:")
        for item in summary.accounts:
            click.echo(
                f"  {item.name:20s} | {item.type.value:6s} | "
                f"{format_money(item.balance, item.currency):>18s} | "
                f"{format_money(item.contribution, currency):>18s}"
            )


def register_commands(cli):
    """Register net worth command with main CLI."""
    cli.add_command(networth)

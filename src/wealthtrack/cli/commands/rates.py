"""Exchange rate and main currency commands."""

import click
from wealthtrack.cli.error_handling import handle_domain_error
from wealthtrack.cli.input_parsing import parse_amount_or_exit
from wealthtrack.domain.settings import SettingsService


@click.group()
def rates_group():
    """Manage the exchange rate table."""
    pass


@rates_group.command("set")
@click.argument("currency")
@click.argument("rate")
@click.pass_context
def set_rate(ctx, currency: str, rate: str) -> None:
    """Set the value of one unit of CURRENCY in the base currency.

    Examples:
        wealthtrack rates set USD 0.92
        wealthtrack rates set GBP 1.17
    """
    service = SettingsService(ctx.obj["db"])
    value = parse_amount_or_exit(ctx, rate, "rate")

    try:
        service.set_exchange_rate(currency, value)
        click.echo(f"1 {currency.upper()} = {value} {service.get_base_currency()}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@rates_group.command("list")
@click.pass_context
def list_rates(ctx) -> None:
    """List exchange rates."""
    service = SettingsService(ctx.obj["db"])
    table = service.get_rate_table()

    click.echo(f"Base currency: {table.base_currency}")
    for currency, rate in sorted(table.rates.items()):
        click.echo(f"  {currency}  {rate}")


@rates_group.command("remove")
@click.argument("currency")
@click.pass_context
def remove_rate(ctx, currency: str) -> None:
    """Remove the rate for a currency."""
    try:
        SettingsService(ctx.obj["db"]).remove_exchange_rate(currency)
        click.echo(f"Removed exchange rate for {currency.upper()}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@rates_group.command("base")
@click.argument("currency", required=False)
@click.pass_context
def base_currency(ctx, currency: str | None) -> None:
    """Show or change the base currency rates are expressed in.

    The new base needs a rate. Stored rates are rescaled to it, so converted
    amounts do not change.
    """
    service = SettingsService(ctx.obj["db"])
    if currency is None:
        click.echo(f"Base currency: {service.get_base_currency()}")
        return

    try:
        code = service.set_base_currency(currency)
        click.echo(f"Base currency set to {code}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@click.group(invoke_without_command=True)
@click.pass_context
def currency_group(ctx):
    """Show or set the main (reporting) currency."""
    if ctx.invoked_subcommand is None:
        click.echo(f"Main currency: {SettingsService(ctx.obj['db']).get_main_currency()}")


@currency_group.command("show")
@click.pass_context
def show_currency(ctx) -> None:
    """Show the main currency."""
    click.echo(f"Main currency: {SettingsService(ctx.obj['db']).get_main_currency()}")


@currency_group.command("set")
@click.argument("currency")
@click.pass_context
def set_currency(ctx, currency: str) -> None:
    """Set the main currency. It must have an exchange rate."""
    try:
        code = SettingsService(ctx.obj["db"]).set_main_currency(currency)
        click.echo(f"Main currency set to {code}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register rate and currency commands with main CLI."""
    cli.add_command(rates_group, name="rates")
    cli.add_command(currency_group, name="currency")

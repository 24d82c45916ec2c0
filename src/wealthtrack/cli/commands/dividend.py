"""Dividend commands."""

import click
from wealthtrack.cli.account_resolution import resolve_account_or_exit
from wealthtrack.cli.display import format_money, format_quantity
from wealthtrack.cli.error_handling import handle_domain_error
from wealthtrack.cli.input_parsing import (
    parse_amount_or_exit,
    parse_date_or_exit,
    parse_optional_date_or_exit,
)
from wealthtrack.domain.account import AccountService
from wealthtrack.domain.dividends import DividendService
from wealthtrack.domain.settings import SettingsService


@click.group()
def dividend_group():
    """Record dividends and summarize withholding tax."""
    pass


@dividend_group.command("add")
@click.argument("account", metavar="ACCOUNT")
@click.argument("symbol", metavar="SYMBOL")
@click.argument("per_share", metavar="AMOUNT_PER_SHARE")
@click.option("--ex-date", help="Ex-dividend date (defaults to today)")
@click.option("--pay-date", help="Payment date")
@click.option("--shares", help="Shares held (defaults to the position on the ex-date)")
@click.option("--tax-rate", help="Withholding rate between 0 and 1 (defaults to the stored rate)")
@click.pass_context
def add_dividend(
    ctx,
    account: str,
    symbol: str,
    per_share: str,
    ex_date: str | None,
    pay_date: str | None,
    shares: str | None,
    tax_rate: str | None,
) -> None:
    """Record a dividend payment.

    Examples:
        wealthtrack dividend add Brokerage AAPL 0.24 --ex-date 2026-02-09
        wealthtrack dividend add 3 MSFT 0.83 --shares 10 --tax-rate 0.15
    """
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)
    amount = parse_amount_or_exit(ctx, per_share, "dividend per share")
    ex = parse_date_or_exit(ctx, ex_date, "ex-date")
    paid = parse_optional_date_or_exit(ctx, pay_date, "pay date")
    share_count = parse_amount_or_exit(ctx, shares, "shares") if shares else None
    rate = parse_amount_or_exit(ctx, tax_rate, "tax rate") if tax_rate else None

    try:
        service = DividendService(db)
        dividend_id = service.record_dividend(
            account_id=account_id,
            symbol=symbol,
            amount_per_share=amount,
            ex_date=ex,
            pay_date=paid,
            shares_held=share_count,
            tax_rate=rate,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    recorded = next(d for d in service.list_dividends(account_id) if d.id == dividend_id)
    click.echo(
        f"Recorded {recorded.symbol} dividend (ID: {dividend_id}): "
        f"gross {format_money(recorded.amount)}, tax {format_money(recorded.tax_amount)}, "
        f"net {format_money(recorded.net_amount)}"
    )


@dividend_group.command("list")
@click.option("--account", help="Stock account name or ID")
@click.pass_context
def list_dividends(ctx, account: str | None) -> None:
    """List recorded dividends, newest first."""
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account) if account else None

    dividends = DividendService(db).list_dividends(account_id)
    if not dividends:
        click.echo("No dividends found.")
        return

    for d in dividends:
        click.echo(
            f"{d.id:4d} | {d.ex_date.isoformat()} | {d.symbol:8s} | "
            f"{format_quantity(d.shares_held):>10s} shares | gross {format_money(d.amount):>10s} | "
            f"tax {format_money(d.tax_amount):>10s} | net {format_money(d.net_amount):>10s}"
        )


@dividend_group.command("delete")
@click.argument("dividend_id", type=int)
@click.pass_context
def delete_dividend(ctx, dividend_id: int) -> None:
    """Delete a dividend record."""
    try:
        DividendService(ctx.obj["db"]).delete_dividend(dividend_id)
        click.echo(f"Deleted dividend {dividend_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@dividend_group.command("taxes")
@click.option("--year", type=int, help="Only this tax year")
@click.option("--account", help="Stock account name or ID")
@click.pass_context
def dividend_taxes(ctx, year: int | None, account: str | None) -> None:
    """Summarize gross, withheld and net dividends per year."""
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account) if account else None

    summaries = DividendService(db).get_tax_summary(year=year, account_id=account_id)
    if not summaries:
        click.echo("No dividends found.")
        return

    click.echo(f"{'Year':6s} {'Count':>6s} {'Gross':>14s} {'Tax':>14s} {'Net':>14s}")
    for s in summaries:
        click.echo(
            f"{s.year:<6d} {s.count:>6d} {format_money(s.total_gross):>14s} "
            f"{format_money(s.total_tax):>14s} {format_money(s.total_net):>14s}"
        )


@dividend_group.command("tax-rate")
@click.argument("rate", required=False)
@click.pass_context
def dividend_tax_rate(ctx, rate: str | None) -> None:
    """Show or set the default withholding rate (0 to 1)."""
    service = SettingsService(ctx.obj["db"])
    if rate is None:
        click.echo(f"Dividend tax rate: {service.get_dividend_tax_rate()}")
        return

    try:
        service.set_dividend_tax_rate(parse_amount_or_exit(ctx, rate, "tax rate"))
        click.echo(f"Dividend tax rate set to {rate}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register dividend commands with main CLI."""
    cli.add_command(dividend_group, name="dividend")

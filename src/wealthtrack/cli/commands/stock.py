"""Stock trade and holdings commands."""

import click
from wealthtrack.cli.account_resolution import resolve_account_or_exit
from wealthtrack.cli.display import format_money, format_quantity
from wealthtrack.cli.error_handling import handle_domain_error
from wealthtrack.cli.input_parsing import parse_amount_or_exit, parse_date_or_exit
from wealthtrack.domain.account import AccountService
from wealthtrack.domain.cost_basis import PortfolioService
from wealthtrack.domain.entities import TradeType


@click.group()
def stock_group():
    """Record stock trades and view holdings."""
    pass


def _record_trade(ctx, trade_type: TradeType, account, symbol, shares, price, fees, trade_date):
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)
    share_count = parse_amount_or_exit(ctx, shares, "shares")
    unit_price = parse_amount_or_exit(ctx, price, "price")
    fee_amount = parse_amount_or_exit(ctx, fees, "fees")
    when = parse_date_or_exit(ctx, trade_date)

    try:
        service = PortfolioService(db)
        trade_id = service.record_trade(
            account_id=account_id,
            symbol=symbol,
            type=trade_type,
            shares=share_count,
            price=unit_price,
            fees=fee_amount,
            date=when,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"Recorded {trade_type.value} of {format_quantity(share_count)} {symbol.upper()} "
        f"@ {format_money(unit_price)} (ID: {trade_id})"
    )


def _trade_command(trade_type: TradeType):
    @click.argument("account", metavar="ACCOUNT")
    @click.argument("symbol", metavar="SYMBOL")
    @click.argument("shares", metavar="SHARES")
    @click.argument("price", metavar="PRICE")
    @click.option("--fees", default="0", help="Commission paid")
    @click.option("--date", "trade_date", help="Trade date (defaults to today)")
    @click.pass_context
    def command(ctx, account, symbol, shares, price, fees, trade_date):
        _record_trade(ctx, trade_type, account, symbol, shares, price, fees, trade_date)

    command.__doc__ = f"Record a {trade_type.value} of SHARES of SYMBOL at PRICE."
    return command


stock_group.command("buy")(_trade_command(TradeType.BUY))
stock_group.command("sell")(_trade_command(TradeType.SELL))


@stock_group.command("holdings")
@click.option("--account", help="Stock account name or ID")
@click.pass_context
def list_holdings(ctx, account: str | None) -> None:
    """Show open positions with weighted-average cost."""
    db = ctx.obj["db"]
    account_service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, account_service, account) if account else None

    holdings = PortfolioService(db).list_holdings(account_id=account_id)
    if not holdings:
        click.echo("No holdings found.")
        return

    accounts = {acc.id: acc for acc in account_service.list_accounts()}
    for h in holdings:
        acc = accounts[h.account_id]
        click.echo(
            f"{acc.name:15s} | {h.symbol:8s} | {format_quantity(h.shares):>12s} shares | "
            f"avg {format_money(h.avg_cost):>12s} | "
            f"cost {format_money(h.cost_basis, acc.currency):>16s}"
        )


@stock_group.command("recalc")
@click.pass_context
def recalc_holdings(ctx) -> None:
    """Rebuild cached holdings from the trade history."""
    states = PortfolioService(ctx.obj["db"]).recalculate_all()
    open_positions = sum(1 for s in states if s.shares > 0)
    click.echo(f"Recalculated {len(states)} holdings ({open_positions} open)")


def register_commands(cli):
    """Register stock commands with main CLI."""
    cli.add_command(stock_group, name="stock")

"""Net worth projection command."""

import click
from wealthtrack.cli.display import format_money
from wealthtrack.cli.error_handling import handle_domain_error
from wealthtrack.domain.entities import MonthlyData
from wealthtrack.domain.projection import ProjectionService


def _echo_months(title: str, months: tuple[MonthlyData, ...]) -> None:
    click.echo(f"\n{title}")
    click.echo(f"{'Month':10s} {'Net worth':>16s} {'Liquid':>16s} {'Investments':>16s} {'Debt':>16s}")
    for m in months:
        click.echo(
            f"{m.label:10s} {format_money(m.net_worth):>16s} {format_money(m.liquid_assets):>16s} "
            f"{format_money(m.investments):>16s} {format_money(m.total_debt):>16s}"
        )


@click.command("projection")
@click.option("--breakdown", is_flag=True, help="List the recurring items behind the projection")
@click.pass_context
def projection(ctx, breakdown: bool) -> None:
    """Project net worth from recurring income and expenses.

    Shows the current year to date and the next 12 months. Only the bank
    balance moves; investments, assets and debts stay at today's values.
    """
    try:
        result = ProjectionService(ctx.obj["db"]).generate()
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    currency = result.main_currency
    summary = result.summary
    click.echo(f"Projection in {currency} from {result.current_month}")
    click.echo(f"  Monthly income:   {format_money(summary.monthly_income):>16s}")
    click.echo(f"  Monthly expenses: {format_money(summary.monthly_expenses):>16s}")
    click.echo(f"  Monthly savings:  {format_money(summary.monthly_savings):>16s}")
    click.echo(f"  Savings rate:     {summary.savings_rate:>15.2f}%")
    click.echo(f"  Year-end net worth: {format_money(summary.projected_year_end_net_worth, currency)}")
    click.echo(f"  Change this year:   {format_money(summary.projected_net_worth_change, currency)}")

    _echo_months("Year to date", result.ytd)
    _echo_months("Next 12 months", result.future)

    if breakdown:
        recurring = result.recurring_breakdown
        click.echo("\nRecurring income:")
        for item in recurring.income_items:
            click.echo(f"  {item.name:20s} {item.frequency.value:8s} {format_money(item.monthly_amount):>14s}/mo")
        click.echo("\nRecurring expenses:")
        for item in recurring.expense_items:
            click.echo(
                f"  {item.name:20s} {item.category:15s} {item.frequency.value:8s} "
                f"{format_money(item.monthly_amount):>14s}/mo"
            )


def register_commands(cli):
    """Register projection command with main CLI."""
    cli.add_command(projection)

"""Refresh, forecast, runway and decision commands."""

import click

from cashflow.cli.error_handling import handle_domain_error
from cashflow.cli.formatting import format_currency, format_signed
from cashflow.domain.dashboard import DashboardService
from cashflow.domain.entities import DecisionOutcome
from cashflow.domain.errors import DomainError
from cashflow.domain.forecast import DEFAULT_HORIZON_WEEKS
from cashflow.domain.ledger import LedgerService
from cashflow.domain.recurring import DEFAULT_LOOKAHEAD_DAYS
from cashflow.utils.amount_parser import parse_positive_amount


@click.command("refresh")
@click.option(
    "--lookahead",
    type=click.IntRange(min=0),
    default=DEFAULT_LOOKAHEAD_DAYS,
    show_default=True,
    help="Generate recurring entries due within this many days",
)
@click.pass_context
def refresh(ctx, lookahead: int):
    """Mark overdue invoices and generate due recurring entries.

    Safe to run repeatedly: entries that already exist are never duplicated.
    """
    service = LedgerService(ctx.obj["db"])
    result = service.refresh(ctx.obj["org_id"], ctx.obj["today"], lookahead_days=lookahead)

    if not result.changed:
        click.echo("Ledger is up to date.")
        return

    for inv in result.overdue_invoices:
        click.echo(f"Overdue: invoice {inv.id} ({inv.client}, {format_currency(inv.amount)})")
    for inv in result.new_invoices:
        click.echo(
            f"Generated invoice {inv.id} for {inv.client}: "
            f"{format_currency(inv.amount)} due {inv.due_date}"
        )
    for bill in result.new_bills:
        click.echo(
            f"Generated bill {bill.id} for {bill.vendor}: "
            f"{format_currency(bill.amount)} due {bill.due_date}"
        )


@click.command("forecast")
@click.option(
    "--weeks",
    type=int,
    default=DEFAULT_HORIZON_WEEKS,
    show_default=True,
    help="Number of weeks to project",
)
@click.pass_context
def forecast(ctx, weeks: int):
    """Project the cash balance week by week."""
    service = DashboardService(ctx.obj["db"], ctx.obj["settings"])

    try:
        projection = service.build_forecast(ctx.obj["org_id"], ctx.obj["today"], weeks)
    except DomainError as e:
        handle_domain_error(ctx, e)

    for warning in projection.warnings:
        click.echo(f"Warning: {warning}", err=True)

    click.echo(f"\nCash forecast from {projection.today} ({len(projection)} weeks)")
    click.echo(f"Opening balance: {format_currency(projection.cash_balance)}")
    click.echo("-" * 80)
    click.echo(
        f"{'Week':<6} {'From':<12} {'To':<12} {'In':>12} {'Out':>12} {'Net':>12} {'Balance':>12}"
    )
    click.echo("-" * 80)
    for week in projection:
        click.echo(
            f"{week.week_index + 1:<6} {str(week.window_start):<12} {str(week.window_end):<12} "
            f"{format_currency(week.inflow):>12} {format_currency(week.outflow):>12} "
            f"{format_signed(week.net_change):>12} {format_currency(week.ending_balance):>12}"
        )
    click.echo("-" * 80)

    negative = projection.first_negative_week
    if negative is not None:
        click.echo(
            f"Cash goes negative in week {negative.week_index + 1} "
            f"(ending {negative.window_end}): {format_currency(negative.ending_balance)}"
        )


@click.command("runway")
@click.pass_context
def runway(ctx):
    """Show how many weeks the current cash lasts."""
    service = DashboardService(ctx.obj["db"], ctx.obj["settings"])
    weeks = service.runway(ctx.obj["org_id"], ctx.obj["today"])
    click.echo(f"Runway: {weeks} weeks")


@click.command("decide")
@click.argument("amount")
@click.pass_context
def decide(ctx, amount: str):
    """Check whether a one-time expense is affordable.

    Examples:
        cashflow decide 2500
        cashflow decide "$12,000"
    """
    service = DashboardService(ctx.obj["db"], ctx.obj["settings"])

    try:
        decision = service.simulate_expense(ctx.obj["org_id"], parse_positive_amount(amount))
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Proposed expense: {format_currency(decision.proposed_expense)}")
    click.echo(f"Runway: {decision.current_runway} -> {decision.new_runway} weeks")

    if decision.outcome is DecisionOutcome.REJECTED:
        click.echo(
            f"REJECTED: this would leave you {format_currency(decision.deficit)} short."
        )
    elif decision.outcome is DecisionOutcome.RISKY:
        click.echo(
            f"RISKY: runway would drop below {ctx.obj['settings'].risky_threshold_weeks} weeks."
        )
    else:
        click.echo("APPROVED: you can afford this expense.")


def register_commands(cli):
    """Register forecasting commands with main CLI."""
    cli.add_command(refresh)
    cli.add_command(forecast)
    cli.add_command(runway)
    cli.add_command(decide)

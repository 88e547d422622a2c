"""Dashboard, weekly review and history commands."""

import click

from cashflow.cli.formatting import format_currency, format_signed
from cashflow.domain.dashboard import HISTORY_WEEKS, DashboardService
from cashflow.domain.status import days_overdue


@click.command("dashboard")
@click.pass_context
def dashboard(ctx):
    """Show cash, receivables, payables, runway and the top alert."""
    service = DashboardService(ctx.obj["db"], ctx.obj["settings"])
    kpis = service.build_kpis(ctx.obj["org_id"], ctx.obj["today"])

    click.echo(f"\nDashboard ({ctx.obj['today']})")
    click.echo("=" * 40)
    click.echo(f"{'Cash:':<22}{format_currency(kpis.cash):>18}")
    click.echo(f"{'Receivables:':<22}{format_currency(kpis.total_receivables):>18}")
    click.echo(f"{'Payables:':<22}{format_currency(kpis.total_payables):>18}")
    click.echo(f"{'Runway:':<22}{str(kpis.runway_weeks) + ' weeks':>18}")
    click.echo(f"{'Overdue invoices:':<22}{kpis.overdue_invoice_count:>18}")
    click.echo(f"{'Bills due this week:':<22}{kpis.bills_due_soon_count:>18}")
    click.echo("=" * 40)

    if kpis.alert is not None:
        click.echo(f"Alert: {kpis.alert.message}")


@click.command("review")
@click.pass_context
def review(ctx):
    """Weekly review: invoices to chase and bills to pay."""
    today = ctx.obj["today"]
    service = DashboardService(ctx.obj["db"], ctx.obj["settings"])
    weekly = service.weekly_review(ctx.obj["org_id"], today)

    click.echo(f"\nWeekly review ({today})")
    click.echo(f"Cash: {format_currency(weekly.cash)}")

    click.echo(f"\nInvoices to chase ({len(weekly.outstanding_invoices)}):")
    if not weekly.outstanding_invoices:
        click.echo("  None")
    for inv in weekly.outstanding_invoices:
        late = days_overdue(inv, today)
        suffix = f", {late} days overdue" if late else ""
        click.echo(
            f"  {inv.id:<16} {inv.client[:24]:<24} {format_currency(inv.amount):>12}  "
            f"due {inv.due_date}{suffix}"
        )

    click.echo(f"\nBills to pay this week ({len(weekly.urgent_bills)}):")
    if not weekly.urgent_bills:
        click.echo("  None")
    for bill in weekly.urgent_bills:
        click.echo(
            f"  {bill.id:<16} {bill.vendor[:24]:<24} {format_currency(bill.amount):>12}  "
            f"due {bill.due_date} [{bill.priority.value}]"
        )

    click.echo(
        f"\nCash + receivables {format_currency(weekly.cash + weekly.total_receivables)} "
        f"vs payables {format_currency(weekly.total_payables)}"
    )
    if weekly.is_healthy:
        click.echo("Status: healthy")
    else:
        click.echo("Status: at risk")


@click.command("history")
@click.option(
    "--weeks",
    type=click.IntRange(min=1),
    default=HISTORY_WEEKS,
    show_default=True,
    help="Number of past weeks to show",
)
@click.pass_context
def history(ctx, weeks: int):
    """Show money received and paid in past weeks."""
    service = DashboardService(ctx.obj["db"], ctx.obj["settings"])
    past = service.cash_history(ctx.obj["org_id"], ctx.obj["today"], weeks=weeks)

    click.echo(f"\nCash history (last {weeks} weeks)")
    click.echo("-" * 64)
    click.echo(f"{'From':<12} {'To':<12} {'Received':>12} {'Paid':>12} {'Net':>12}")
    click.echo("-" * 64)
    for week in past:
        click.echo(
            f"{str(week.window_start):<12} {str(week.window_end):<12} "
            f"{format_currency(week.received):>12} {format_currency(week.paid):>12} "
            f"{format_signed(week.net):>12}"
        )


def register_commands(cli):
    """Register dashboard commands with main CLI."""
    cli.add_command(dashboard)
    cli.add_command(review)
    cli.add_command(history)

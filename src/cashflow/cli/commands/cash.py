"""Cash balance commands."""

from datetime import datetime

import click

from cashflow.cli.error_handling import handle_domain_error
from cashflow.cli.formatting import format_currency
from cashflow.domain.errors import DomainError
from cashflow.domain.ledger import LedgerService
from cashflow.utils.amount_parser import parse_amount


@click.group("cash")
def cash_group():
    """Record and show the cash balance."""
    pass


@cash_group.command("set")
@click.argument("amount")
@click.pass_context
def set_cash(ctx, amount: str):
    """Record the current cash balance.

    The balance may be negative (overdrawn). Use "--" before negative
    amounts, e.g. cashflow cash set -- -250.
    """
    today = ctx.obj["today"]
    service = LedgerService(ctx.obj["db"])

    try:
        snapshot = service.record_cash(
            ctx.obj["org_id"],
            parse_amount(amount),
            recorded_at=datetime.combine(today, datetime.now().time()),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Cash balance set to {format_currency(snapshot.balance)}")


@cash_group.command("show")
@click.pass_context
def show_cash(ctx):
    """Show the latest recorded cash balance."""
    snapshot = ctx.obj["db"].latest_cash_snapshot(ctx.obj["org_id"])
    if snapshot is None:
        click.echo("No cash balance recorded yet (assuming $0.00).")
        return

    click.echo(
        f"Cash balance: {format_currency(snapshot.balance)} "
        f"(recorded {snapshot.recorded_at:%Y-%m-%d %H:%M})"
    )


def register_commands(cli):
    """Register cash commands with main CLI."""
    cli.add_command(cash_group)

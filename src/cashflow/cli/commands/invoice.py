"""Invoice (accounts receivable) commands."""

import click

from cashflow.cli.error_handling import handle_domain_error
from cashflow.cli.formatting import format_currency
from cashflow.domain.entities import InvoiceStatus
from cashflow.domain.errors import DomainError
from cashflow.domain.ledger import LedgerService
from cashflow.domain.status import days_overdue
from cashflow.utils.amount_parser import parse_positive_amount
from cashflow.utils.date_parser import parse_date


@click.group("invoice")
def invoice_group():
    """Manage invoices (money owed to you)."""
    pass


@invoice_group.command("add")
@click.argument("client")
@click.option("--amount", required=True, help="Invoice amount (e.g., 5000 or 1,250.00)")
@click.option(
    "--due",
    "due_date",
    required=True,
    help="Due date (YYYY-MM-DD or relative like 'in 14 days')",
)
@click.option("--sent", "date_sent", help="Date sent (defaults to today)")
@click.option("--id", "invoice_id", help="Invoice ID (auto-generated if not provided)")
@click.pass_context
def add_invoice(
    ctx,
    client: str,
    amount: str,
    due_date: str,
    date_sent: str | None,
    invoice_id: str | None,
):
    """Add an invoice.

    Examples:
        cashflow invoice add "Acme Corp" --amount 5000 --due 2025-01-15
        cashflow invoice add Globex --amount 3200 --sent yesterday --due "in 30 days"
    """
    today = ctx.obj["today"]
    service = LedgerService(ctx.obj["db"])

    try:
        invoice = service.create_invoice(
            org_id=ctx.obj["org_id"],
            client=client,
            amount=parse_positive_amount(amount),
            date_sent=parse_date(date_sent, today) if date_sent else today,
            due_date=parse_date(due_date, today),
            invoice_id=invoice_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created invoice {invoice.id}")
    click.echo(f"  Client: {invoice.client}")
    click.echo(f"  Amount: {format_currency(invoice.amount)}")
    click.echo(f"  Due: {invoice.due_date}")


@invoice_group.command("list")
@click.option(
    "--status",
    type=click.Choice([s.value for s in InvoiceStatus], case_sensitive=False),
    help="Only show invoices with this status",
)
@click.pass_context
def list_invoices(ctx, status: str | None):
    """List invoices with their current status."""
    today = ctx.obj["today"]
    service = LedgerService(ctx.obj["db"])

    status_filter = None
    if status is not None:
        status_filter = next(s for s in InvoiceStatus if s.value.lower() == status.lower())

    invoices = service.list_invoices(ctx.obj["org_id"], status=status_filter, today=today)
    if not invoices:
        click.echo("No invoices found.")
        return

    click.echo(f"\nFound {len(invoices)} invoice(s):")
    click.echo("-" * 96)
    click.echo(
        f"{'ID':<16} {'Client':<24} {'Sent':<12} {'Due':<12} {'Amount':>12}  {'Status':<16}"
    )
    click.echo("-" * 96)
    for inv in invoices:
        status_str = inv.status.value
        if inv.status is InvoiceStatus.OVERDUE:
            status_str = f"{status_str} ({days_overdue(inv, today)} days)"
        click.echo(
            f"{inv.id:<16} {inv.client[:24]:<24} {str(inv.date_sent):<12} {str(inv.due_date):<12} "
            f"{format_currency(inv.amount):>12}  {status_str:<16}"
        )


@invoice_group.command("pay")
@click.argument("invoice_id")
@click.option("--date", "paid_on", help="Payment date (defaults to today)")
@click.pass_context
def pay_invoice(ctx, invoice_id: str, paid_on: str | None):
    """Mark an invoice as paid."""
    today = ctx.obj["today"]
    service = LedgerService(ctx.obj["db"])

    try:
        invoice = service.mark_invoice_paid(
            ctx.obj["org_id"],
            invoice_id,
            paid_on=parse_date(paid_on, today) if paid_on else today,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Invoice {invoice.id} marked as paid on {invoice.paid_on}")


@invoice_group.command("edit")
@click.argument("invoice_id")
@click.option("--client", help="Client name")
@click.option("--amount", help="Invoice amount")
@click.option("--sent", "date_sent", help="Date sent")
@click.option("--due", "due_date", help="Due date")
@click.option(
    "--status",
    type=click.Choice([s.value for s in InvoiceStatus], case_sensitive=False),
    help="New status (must follow Sent -> Overdue -> Paid)",
)
@click.option("--paid-on", help="Payment date when setting the status to Paid (defaults to today)")
@click.pass_context
def edit_invoice(
    ctx,
    invoice_id: str,
    client: str | None,
    amount: str | None,
    date_sent: str | None,
    due_date: str | None,
    status: str | None,
    paid_on: str | None,
):
    """Edit an invoice.

    Updates only the fields that are provided.

    Examples:
        cashflow invoice edit INV-1001 --amount 5250
        cashflow invoice edit INV-1001 --due "in 14 days"
    """
    today = ctx.obj["today"]
    service = LedgerService(ctx.obj["db"])

    try:
        status_value = None
        if status is not None:
            status_value = next(s for s in InvoiceStatus if s.value.lower() == status.lower())
        invoice = service.update_invoice(
            ctx.obj["org_id"],
            invoice_id,
            client=client,
            amount=parse_positive_amount(amount) if amount is not None else None,
            date_sent=parse_date(date_sent, today) if date_sent else None,
            due_date=parse_date(due_date, today) if due_date else None,
            status=status_value,
            paid_on=parse_date(paid_on, today) if paid_on else today,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated invoice {invoice.id}")
    click.echo(f"  Client: {invoice.client}")
    click.echo(f"  Amount: {format_currency(invoice.amount)}")
    click.echo(f"  Sent: {invoice.date_sent}")
    click.echo(f"  Due: {invoice.due_date}")
    click.echo(f"  Status: {invoice.status.value}")


@invoice_group.command("delete")
@click.argument("invoice_id")
@click.confirmation_option(prompt="Are you sure you want to delete this invoice?")
@click.pass_context
def delete_invoice(ctx, invoice_id: str):
    """Delete an invoice."""
    service = LedgerService(ctx.obj["db"])
    try:
        service.delete_invoice(ctx.obj["org_id"], invoice_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted invoice {invoice_id}")


@invoice_group.command("remind")
@click.argument("invoice_id")
@click.pass_context
def remind_invoice(ctx, invoice_id: str):
    """Print a payment reminder for an unpaid invoice.

    Examples:
        cashflow invoice remind INV-1001
    """
    service = LedgerService(ctx.obj["db"])
    try:
        reminder = service.payment_reminder(ctx.obj["org_id"], invoice_id, ctx.obj["today"])
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Subject: {reminder.subject}")
    click.echo()
    click.echo(reminder.body)


def register_commands(cli):
    """Register invoice commands with main CLI."""
    cli.add_command(invoice_group)

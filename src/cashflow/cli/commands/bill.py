"""Bill (accounts payable) commands."""

import click

from cashflow.cli.error_handling import handle_domain_error
from cashflow.cli.formatting import format_currency
from cashflow.domain.entities import BillPriority, BillStatus
from cashflow.domain.errors import DomainError
from cashflow.domain.ledger import LedgerService
from cashflow.utils.amount_parser import parse_positive_amount
from cashflow.utils.date_parser import parse_date


def _choice(enum_cls):
    return click.Choice([m.value for m in enum_cls], case_sensitive=False)


def _lookup(enum_cls, value: str):
    return next(m for m in enum_cls if m.value.lower() == value.lower())


@click.group("bill")
def bill_group():
    """Manage bills (money you owe)."""
    pass


@bill_group.command("add")
@click.argument("vendor")
@click.option("--amount", required=True, help="Bill amount (e.g., 450 or 1,200.00)")
@click.option(
    "--due",
    "due_date",
    required=True,
    help="Due date (YYYY-MM-DD or relative like 'in 7 days')",
)
@click.option(
    "--priority",
    type=_choice(BillPriority),
    default=BillPriority.MEDIUM.value,
    show_default=True,
    help="Payment priority",
)
@click.option("--category", help="Expense category (e.g., 'Software')")
@click.option("--id", "bill_id", help="Bill ID (auto-generated if not provided)")
@click.pass_context
def add_bill(
    ctx,
    vendor: str,
    amount: str,
    due_date: str,
    priority: str,
    category: str | None,
    bill_id: str | None,
):
    """Add a bill.

    Examples:
        cashflow bill add AWS --amount 450 --due 2025-01-10
        cashflow bill add Landlord --amount 2000 --due "in 5 days" --priority high
    """
    today = ctx.obj["today"]
    service = LedgerService(ctx.obj["db"])

    try:
        bill = service.create_bill(
            org_id=ctx.obj["org_id"],
            vendor=vendor,
            amount=parse_positive_amount(amount),
            due_date=parse_date(due_date, today),
            priority=_lookup(BillPriority, priority),
            category=category,
            bill_id=bill_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created bill {bill.id}")
    click.echo(f"  Vendor: {bill.vendor}")
    click.echo(f"  Amount: {format_currency(bill.amount)}")
    click.echo(f"  Due: {bill.due_date}")
    click.echo(f"  Priority: {bill.priority.value}")


@bill_group.command("list")
@click.option("--status", type=_choice(BillStatus), help="Only show bills with this status")
@click.pass_context
def list_bills(ctx, status: str | None):
    """List bills."""
    service = LedgerService(ctx.obj["db"])

    status_filter = _lookup(BillStatus, status) if status is not None else None
    bills = service.list_bills(ctx.obj["org_id"], status=status_filter)
    if not bills:
        click.echo("No bills found.")
        return

    click.echo(f"\nFound {len(bills)} bill(s):")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<16} {'Vendor':<24} {'Due':<12} {'Amount':>12}  {'Priority':<8} {'Status':<8} {'Category':<14}"
    )
    click.echo("-" * 100)
    for bill in bills:
        click.echo(
            f"{bill.id:<16} {bill.vendor[:24]:<24} {str(bill.due_date):<12} "
            f"{format_currency(bill.amount):>12}  {bill.priority.value:<8} {bill.status.value:<8} "
            f"{(bill.category or '')[:14]:<14}"
        )


@bill_group.command("pay")
@click.argument("bill_id")
@click.option("--date", "paid_on", help="Payment date (defaults to today)")
@click.pass_context
def pay_bill(ctx, bill_id: str, paid_on: str | None):
    """Mark a bill as paid."""
    today = ctx.obj["today"]
    service = LedgerService(ctx.obj["db"])

    try:
        bill = service.mark_bill_paid(
            ctx.obj["org_id"],
            bill_id,
            paid_on=parse_date(paid_on, today) if paid_on else today,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Bill {bill.id} marked as paid on {bill.paid_on}")


@bill_group.command("edit")
@click.argument("bill_id")
@click.option("--vendor", help="Vendor name")
@click.option("--amount", help="Bill amount")
@click.option("--due", "due_date", help="Due date")
@click.option("--priority", type=_choice(BillPriority), help="Payment priority")
@click.option("--category", help="Expense category, or empty string to clear")
@click.option("--status", type=_choice(BillStatus), help="New status")
@click.option("--paid-on", help="Payment date when setting the status to Paid (defaults to today)")
@click.pass_context
def edit_bill(
    ctx,
    bill_id: str,
    vendor: str | None,
    amount: str | None,
    due_date: str | None,
    priority: str | None,
    category: str | None,
    status: str | None,
    paid_on: str | None,
):
    """Edit a bill.

    Updates only the fields that are provided. Use --category "" to clear the category.

    Examples:
        cashflow bill edit BILL-2001 --amount 475
        cashflow bill edit BILL-2001 --priority high --category ""
    """
    today = ctx.obj["today"]
    service = LedgerService(ctx.obj["db"])

    try:
        bill = service.update_bill(
            ctx.obj["org_id"],
            bill_id,
            vendor=vendor,
            amount=parse_positive_amount(amount) if amount is not None else None,
            due_date=parse_date(due_date, today) if due_date else None,
            priority=_lookup(BillPriority, priority) if priority is not None else None,
            category=category,
            status=_lookup(BillStatus, status) if status is not None else None,
            paid_on=parse_date(paid_on, today) if paid_on else today,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated bill {bill.id}")
    click.echo(f"  Vendor: {bill.vendor}")
    click.echo(f"  Amount: {format_currency(bill.amount)}")
    click.echo(f"  Due: {bill.due_date}")
    click.echo(f"  Priority: {bill.priority.value}")
    click.echo(f"  Category: {bill.category or '-'}")
    click.echo(f"  Status: {bill.status.value}")


@bill_group.command("delete")
@click.argument("bill_id")
@click.confirmation_option(prompt="Are you sure you want to delete this bill?")
@click.pass_context
def delete_bill(ctx, bill_id: str):
    """Delete a bill."""
    service = LedgerService(ctx.obj["db"])
    try:
        service.delete_bill(ctx.obj["org_id"], bill_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted bill {bill_id}")


def register_commands(cli):
    """Register bill commands with main CLI."""
    cli.add_command(bill_group)

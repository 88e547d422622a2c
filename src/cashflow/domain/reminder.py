"""Payment reminder messages for unpaid invoices."""

from decimal import Decimal

from cashflow.domain.entities import Invoice, InvoiceStatus, PaymentReminder
from cashflow.domain.errors import ConflictError


def build_reminder(invoice: Invoice) -> PaymentReminder:
    """Render the reminder for an invoice.

    The invoice status should already be resolved for the reference date, so
    an Overdue invoice gets the past-due wording and a Sent one a courtesy
    reminder.

    Raises:
        ConflictError: If the invoice is already paid
    """
    if invoice.status is InvoiceStatus.PAID:
        raise ConflictError(f"Invoice '{invoice.id}' is already paid")

    overdue = invoice.status is InvoiceStatus.OVERDUE
    subject = f"Invoice {invoice.id} {'Overdue' if overdue else 'Payment Reminder'}"
    body = (
        f"Dear {invoice.client},\n\n"
        f"This is a friendly reminder that invoice {invoice.id} for "
        f"{_dollars(invoice.amount)} {'was' if overdue else 'is'} due on "
        f"{invoice.due_date.isoformat()}.\n\n"
        "Please remit payment at your earliest convenience.\n\n"
        "Thank you."
    )
    return PaymentReminder(
        invoice_id=invoice.id, client=invoice.client, subject=subject, body=body
    )


def _dollars(amount: Decimal) -> str:
    return f"${amount:,.2f}"

"""Status transition rules for invoices and bills."""

import logging
from dataclasses import replace
from datetime import date
from typing import Iterable, Optional

from cashflow.domain.entities import Bill, BillStatus, Invoice, InvoiceStatus
from cashflow.domain.errors import InvalidTransitionError, invalid_transition

logger = logging.getLogger(__name__)

# Paid is terminal for both entry kinds.
ALLOWED_INVOICE_TRANSITIONS: dict[InvoiceStatus, frozenset[InvoiceStatus]] = {
    InvoiceStatus.SENT: frozenset({InvoiceStatus.OVERDUE, InvoiceStatus.PAID}),
    InvoiceStatus.OVERDUE: frozenset({InvoiceStatus.PAID}),
    InvoiceStatus.PAID: frozenset(),
}

ALLOWED_BILL_TRANSITIONS: dict[BillStatus, frozenset[BillStatus]] = {
    BillStatus.UNPAID: frozenset({BillStatus.PAID}),
    BillStatus.PAID: frozenset(),
}


def resolve_statuses(invoices: Iterable[Invoice], today: date) -> list[Invoice]:
    """Mark unpaid invoices past their due date as Overdue.

    Args:
        invoices: Invoices to normalize
        today: Reference date supplied by the caller

    Returns:
        New list with the same invoices in the same order; only the status of
        Sent invoices with ``today > due_date`` differs. Paid invoices are
        returned untouched.
    """
    resolved = []
    for invoice in invoices:
        if invoice.status is InvoiceStatus.SENT and today > invoice.due_date:
            invoice = replace(invoice, status=InvoiceStatus.OVERDUE)
        resolved.append(invoice)
    return resolved


def overdue_transitions(invoices: Iterable[Invoice], today: date) -> list[Invoice]:
    """Return only the invoices whose status ``resolve_statuses`` would change."""
    before = list(invoices)
    after = resolve_statuses(before, today)
    changed = [new for old, new in zip(before, after) if old.status is not new.status]
    if changed:
        logger.debug("%d invoice(s) became overdue as of %s", len(changed), today)
    return changed


def transition_invoice(
    invoice: Invoice, status: InvoiceStatus, on: Optional[date] = None
) -> Invoice:
    """Move an invoice to a new status.

    Args:
        invoice: Invoice to update
        status: Target status
        on: Payment date, recorded when the target status is Paid

    Returns:
        Updated invoice

    Raises:
        InvalidTransitionError: If the transition is not allowed
    """
    if status not in ALLOWED_INVOICE_TRANSITIONS[invoice.status]:
        raise InvalidTransitionError(
            invalid_transition("invoice", invoice.id, invoice.status.value, status.value)
        )
    paid_on = on if status is InvoiceStatus.PAID else invoice.paid_on
    return replace(invoice, status=status, paid_on=paid_on)


def transition_bill(bill: Bill, status: BillStatus, on: Optional[date] = None) -> Bill:
    """Move a bill to a new status.

    Raises:
        InvalidTransitionError: If the transition is not allowed
    """
    if status not in ALLOWED_BILL_TRANSITIONS[bill.status]:
        raise InvalidTransitionError(
            invalid_transition("bill", bill.id, bill.status.value, status.value)
        )
    paid_on = on if status is BillStatus.PAID else bill.paid_on
    return replace(bill, status=status, paid_on=paid_on)


def days_overdue(invoice: Invoice, today: date) -> int:
    """Whole days an unpaid invoice is past due, 0 otherwise."""
    if invoice.is_paid:
        return 0
    return max((today - invoice.due_date).days, 0)

"""Ledger domain service."""

import logging
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import uuid4

from cashflow.database.base import Database
from cashflow.domain.backup import dump_ledger
from cashflow.domain.entities import (
    Bill,
    BillPriority,
    BillStatus,
    CashSnapshot,
    Invoice,
    InvoiceStatus,
    Ledger,
    PaymentReminder,
    RefreshResult,
)
from cashflow.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    bill_not_found,
    duplicate_entry_id,
    invoice_not_found,
)
from cashflow.domain.recurring import DEFAULT_LOOKAHEAD_DAYS, materialize_recurring
from cashflow.domain.reminder import build_reminder
from cashflow.domain.status import (
    overdue_transitions,
    resolve_statuses,
    transition_bill,
    transition_invoice,
)
from cashflow.domain.validation import validate_bill, validate_cents, validate_invoice

logger = logging.getLogger(__name__)


def generate_entry_id(prefix: str) -> str:
    """Generate an id for a manually created entry."""
    return f"{prefix}-{uuid4().hex[:8].upper()}"


class LedgerService:
    """Service for managing invoices, bills and cash for an organization."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def ensure_organization(self, name: str) -> int:
        """Get the ID of an organization, creating it if needed.

        Args:
            name: Organization name

        Returns:
            Organization ID
        """
        org = self.db.get_organization_by_name(name)
        if org is not None:
            return org.id
        logger.info("Creating organization '%s'", name)
        return self.db.create_organization(name)

    def current_cash(self, org_id: int) -> Decimal:
        """Return the latest recorded cash balance, or 0 if none was recorded."""
        snapshot = self.db.latest_cash_snapshot(org_id)
        if snapshot is None:
            return Decimal("0")
        return snapshot.balance

    def load_ledger(self, org_id: int) -> Ledger:
        """Load a snapshot of an organization's ledger.

        Args:
            org_id: Organization ID

        Returns:
            Ledger with the current cash, invoices, bills and templates
        """
        return Ledger(
            cash_balance=self.current_cash(org_id),
            invoices=tuple(self.db.list_invoices(org_id)),
            bills=tuple(self.db.list_bills(org_id)),
            templates=tuple(self.db.list_templates(org_id)),
        )

    def _ensure_id_free(self, org_id: int, entry_id: str) -> None:
        if self.db.get_invoice(org_id, entry_id) is not None:
            raise ConflictError(duplicate_entry_id("Invoice", entry_id))
        if self.db.get_bill(org_id, entry_id) is not None:
            raise ConflictError(duplicate_entry_id("Bill", entry_id))

    def create_invoice(
        self,
        org_id: int,
        client: str,
        amount: Decimal,
        date_sent: date,
        due_date: date,
        invoice_id: Optional[str] = None,
    ) -> Invoice:
        """Create an invoice.

        Args:
            org_id: Organization ID
            client: Client name
            amount: Invoice amount
            date_sent: Date the invoice was sent
            due_date: Payment due date
            invoice_id: Optional explicit ID (generated if not provided)

        Returns:
            The created invoice

        Raises:
            ValidationError: If the invoice breaks an invariant
            ConflictError: If the ID is already used
        """
        invoice = validate_invoice(
            Invoice(
                id=invoice_id or generate_entry_id("INV"),
                client=client.strip() if client else client,
                amount=amount,
                date_sent=date_sent,
                due_date=due_date,
                status=InvoiceStatus.SENT,
            )
        )
        self._ensure_id_free(org_id, invoice.id)
        self.db.save_invoices(org_id, [invoice])
        logger.info("Created invoice %s for %s", invoice.id, invoice.amount)
        return invoice

    def create_bill(
        self,
        org_id: int,
        vendor: str,
        amount: Decimal,
        due_date: date,
        priority: BillPriority = BillPriority.MEDIUM,
        category: Optional[str] = None,
        bill_id: Optional[str] = None,
    ) -> Bill:
        """Create a bill.

        Raises:
            ValidationError: If the bill breaks an invariant
            ConflictError: If the ID is already used
        """
        bill = validate_bill(
            Bill(
                id=bill_id or generate_entry_id("BILL"),
                vendor=vendor.strip() if vendor else vendor,
                amount=amount,
                due_date=due_date,
                status=BillStatus.UNPAID,
                priority=priority,
                category=category,
            )
        )
        self._ensure_id_free(org_id, bill.id)
        self.db.save_bills(org_id, [bill])
        logger.info("Created bill %s for %s", bill.id, bill.amount)
        return bill

    def list_invoices(
        self,
        org_id: int,
        status: Optional[InvoiceStatus] = None,
        today: Optional[date] = None,
    ) -> list[Invoice]:
        """List invoices, optionally filtered by status.

        Args:
            org_id: Organization ID
            status: Optional status filter
            today: If given, statuses are resolved as of this date before
                filtering (nothing is persisted)
        """
        invoices = self.db.list_invoices(org_id)
        if today is not None:
            invoices = resolve_statuses(invoices, today)
        if status is not None:
            invoices = [inv for inv in invoices if inv.status is status]
        return invoices

    def list_bills(self, org_id: int, status: Optional[BillStatus] = None) -> list[Bill]:
        """List bills, optionally filtered by status."""
        bills = self.db.list_bills(org_id)
        if status is not None:
            bills = [bill for bill in bills if bill.status is status]
        return bills

    def mark_invoice_paid(self, org_id: int, invoice_id: str, paid_on: date) -> Invoice:
        """Mark an invoice as paid.

        Raises:
            NotFoundError: If the invoice doesn't exist
            InvalidTransitionError: If the invoice is already paid
        """
        invoice = self._require_invoice(org_id, invoice_id)
        paid = transition_invoice(invoice, InvoiceStatus.PAID, on=paid_on)
        self.db.save_invoices(org_id, [paid])
        logger.info("Invoice %s paid on %s", invoice_id, paid_on)
        return paid

    def mark_bill_paid(self, org_id: int, bill_id: str, paid_on: date) -> Bill:
        """Mark a bill as paid.

        Raises:
            NotFoundError: If the bill doesn't exist
            InvalidTransitionError: If the bill is already paid
        """
        bill = self._require_bill(org_id, bill_id)
        paid = transition_bill(bill, BillStatus.PAID, on=paid_on)
        self.db.save_bills(org_id, [paid])
        logger.info("Bill %s paid on %s", bill_id, paid_on)
        return paid

    def _require_invoice(self, org_id: int, invoice_id: str) -> Invoice:
        invoice = self.db.get_invoice(org_id, invoice_id)
        if invoice is None:
            raise NotFoundError(invoice_not_found(invoice_id))
        return invoice

    def _require_bill(self, org_id: int, bill_id: str) -> Bill:
        bill = self.db.get_bill(org_id, bill_id)
        if bill is None:
            raise NotFoundError(bill_not_found(bill_id))
        return bill

    def update_invoice(
        self,
        org_id: int,
        invoice_id: str,
        client: Optional[str] = None,
        amount: Optional[Decimal] = None,
        date_sent: Optional[date] = None,
        due_date: Optional[date] = None,
        status: Optional[InvoiceStatus] = None,
        paid_on: Optional[date] = None,
    ) -> Invoice:
        """Update an invoice.

        Fields left as None keep their current value. The edited invoice is
        validated like a new one, and a status change must follow the
        transition rules.

        Args:
            org_id: Organization ID
            invoice_id: ID of the invoice to update
            client: New client name
            amount: New amount
            date_sent: New date sent
            due_date: New due date
            status: New status
            paid_on: Payment date, required when the new status is Paid

        Returns:
            The updated invoice

        Raises:
            NotFoundError: If the invoice doesn't exist
            ValidationError: If the edited invoice breaks an invariant
            InvalidTransitionError: If the status change is not allowed
        """
        invoice = self._require_invoice(org_id, invoice_id)

        changes = {}
        if client is not None:
            changes["client"] = client.strip()
        if amount is not None:
            changes["amount"] = amount
        if date_sent is not None:
            changes["date_sent"] = date_sent
        if due_date is not None:
            changes["due_date"] = due_date
        updated = replace(invoice, **changes)

        if status is not None and status is not invoice.status:
            if status is InvoiceStatus.PAID and paid_on is None:
                raise ValidationError("A payment date is required to mark an invoice paid")
            updated = transition_invoice(updated, status, on=paid_on)

        validate_invoice(updated)
        self.db.save_invoices(org_id, [updated])
        logger.info("Updated invoice %s", invoice_id)
        return updated

    def update_bill(
        self,
        org_id: int,
        bill_id: str,
        vendor: Optional[str] = None,
        amount: Optional[Decimal] = None,
        due_date: Optional[date] = None,
        priority: Optional[BillPriority] = None,
        category: Optional[str] = None,
        status: Optional[BillStatus] = None,
        paid_on: Optional[date] = None,
    ) -> Bill:
        """Update a bill.

        Fields left as None keep their current value. An empty category
        clears it.

        Raises:
            NotFoundError: If the bill doesn't exist
            ValidationError: If the edited bill breaks an invariant
            InvalidTransitionError: If the status change is not allowed
        """
        bill = self._require_bill(org_id, bill_id)

        changes = {}
        if vendor is not None:
            changes["vendor"] = vendor.strip()
        if amount is not None:
            changes["amount"] = amount
        if due_date is not None:
            changes["due_date"] = due_date
        if priority is not None:
            changes["priority"] = priority
        if category is not None:
            changes["category"] = category.strip() or None
        updated = replace(bill, **changes)

        if status is not None and status is not bill.status:
            if status is BillStatus.PAID and paid_on is None:
                raise ValidationError("A payment date is required to mark a bill paid")
            updated = transition_bill(updated, status, on=paid_on)

        validate_bill(updated)
        self.db.save_bills(org_id, [updated])
        logger.info("Updated bill %s", bill_id)
        return updated

    def delete_invoice(self, org_id: int, invoice_id: str) -> None:
        """Delete an invoice.

        Raises:
            NotFoundError: If the invoice doesn't exist
        """
        self.db.delete_invoice(org_id, invoice_id)
        logger.info("Deleted invoice %s", invoice_id)

    def delete_bill(self, org_id: int, bill_id: str) -> None:
        """Delete a bill.

        Raises:
            NotFoundError: If the bill doesn't exist
        """
        self.db.delete_bill(org_id, bill_id)
        logger.info("Deleted bill %s", bill_id)

    def payment_reminder(self, org_id: int, invoice_id: str, today: date) -> PaymentReminder:
        """Render a payment reminder for an unpaid invoice.

        The invoice status is resolved as of ``today`` first, so a past-due
        invoice is reminded as overdue even before the next refresh.

        Raises:
            NotFoundError: If the invoice doesn't exist
            ConflictError: If the invoice is already paid
        """
        invoice = self._require_invoice(org_id, invoice_id)
        reminder = build_reminder(resolve_statuses([invoice], today)[0])
        logger.info("Prepared reminder for invoice %s", invoice_id)
        return reminder

    def export_ledger(self, org_id: int, today: date) -> str:
        """Serialize the organization's ledger as a JSON backup."""
        return dump_ledger(self.load_ledger(org_id), exported_on=today)

    def record_cash(self, org_id: int, balance: Decimal, recorded_at: datetime) -> CashSnapshot:
        """Record the current cash balance.

        Raises:
            ValidationError: If the balance is not a finite number of whole cents
        """
        validate_cents(balance, "Cash balance")
        snapshot = self.db.record_cash_snapshot(org_id, balance, recorded_at)
        logger.info("Recorded cash balance %s", balance)
        return snapshot

    def refresh(
        self, org_id: int, today: date, lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS
    ) -> RefreshResult:
        """Bring the ledger up to date as of ``today``.

        Marks past-due invoices Overdue, then generates the recurring entries
        due within the lookahead window, and persists both.

        Args:
            org_id: Organization ID
            today: Reference date
            lookahead_days: Recurring lookahead window in days

        Returns:
            RefreshResult listing the persisted changes
        """
        ledger = self.load_ledger(org_id)

        overdue = overdue_transitions(ledger.invoices, today)
        invoices = resolve_statuses(ledger.invoices, today)
        generated = materialize_recurring(
            ledger.templates, invoices, ledger.bills, today, lookahead_days
        )

        self.db.save_invoices(org_id, overdue + list(generated.new_invoices))
        self.db.save_bills(org_id, list(generated.new_bills))

        result = RefreshResult(
            overdue_invoices=tuple(overdue),
            new_invoices=generated.new_invoices,
            new_bills=generated.new_bills,
        )
        if result.changed:
            logger.info(
                "Refresh: %d overdue, %d invoice(s) and %d bill(s) generated",
                len(result.overdue_invoices),
                len(result.new_invoices),
                len(result.new_bills),
            )
        return result

"""Tests for database mappers."""

from datetime import date, datetime, UTC
from decimal import Decimal

from cashflow.database.models import (
    Bill as ORMBill,
    CashSnapshot as ORMCashSnapshot,
    Invoice as ORMInvoice,
    Organization as ORMOrganization,
    RecurringTemplate as ORMRecurringTemplate,
)
from cashflow.database.mappers import (
    apply_bill,
    apply_invoice,
    apply_template,
    bill_to_domain,
    cash_snapshot_to_domain,
    invoice_to_domain,
    organization_to_domain,
    template_to_domain,
)
from cashflow.domain.entities import (
    Bill,
    BillPriority,
    BillStatus,
    Frequency,
    Invoice,
    InvoiceStatus,
    Organization,
    RecurringTemplate,
    TemplateType,
)


def test_organization_to_domain():
    created = datetime.now(UTC)
    org = organization_to_domain(ORMOrganization(id=1, name="Acme", created_at=created))
    assert org == Organization(id=1, name="Acme", created_at=created)


class TestInvoiceMapper:
    def test_invoice_to_domain(self):
        orm_invoice = ORMInvoice(
            id="INV-1",
            org_id=1,
            client="Acme",
            amount=Decimal("100.00"),
            date_sent=date(2025, 1, 1),
            due_date=date(2025, 1, 31),
            status="Overdue",
        )
        invoice = invoice_to_domain(orm_invoice)
        assert isinstance(invoice, Invoice)
        assert invoice.status is InvoiceStatus.OVERDUE
        assert invoice.paid_on is None

    def test_apply_invoice_stores_plain_strings(self):
        invoice = Invoice(
            id="INV-1",
            client="Acme",
            amount=Decimal("100"),
            date_sent=date(2025, 1, 1),
            due_date=date(2025, 1, 31),
            status=InvoiceStatus.PAID,
            paid_on=date(2025, 1, 20),
            template_id="TPL-1",
        )
        row = apply_invoice(ORMInvoice(org_id=1), invoice)
        assert row.status == "Paid"
        assert type(row.status) is str
        assert row.template_id == "TPL-1"
        assert invoice_to_domain(row) == invoice


class TestBillMapper:
    def test_bill_roundtrip(self):
        bill = Bill(
            id="BILL-1",
            vendor="AWS",
            amount=Decimal("450"),
            due_date=date(2025, 1, 10),
            status=BillStatus.PAID,
            priority=BillPriority.LOW,
            paid_on=date(2025, 1, 9),
        )
        row = apply_bill(ORMBill(org_id=1), bill)
        assert row.priority == "Low"
        assert bill_to_domain(row) == bill


def test_template_roundtrip():
    template = RecurringTemplate(
        id="TPL-1",
        type=TemplateType.BILL,
        name="Rent",
        amount=Decimal("2000"),
        frequency=Frequency.QUARTERLY,
        start_date=date(2025, 1, 1),
        active=False,
    )
    row = apply_template(ORMRecurringTemplate(org_id=1), template)
    assert row.type == "bill"
    assert row.frequency == "quarterly"
    assert template_to_domain(row) == template


def test_cash_snapshot_to_domain():
    snapshot = cash_snapshot_to_domain(
        ORMCashSnapshot(id=1, org_id=1, balance=Decimal("-20.00"), recorded_at=datetime(2025, 1, 1))
    )
    assert snapshot.balance == Decimal("-20.00")
    assert snapshot.recorded_at == datetime(2025, 1, 1)

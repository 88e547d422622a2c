"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including the mapping between the
enumerations of the domain and the plain strings stored in the database.
"""

from cashflow.domain import entities as domain
from cashflow.database.models import (
    Organization as ORMOrganization,
    Invoice as ORMInvoice,
    Bill as ORMBill,
    RecurringTemplate as ORMRecurringTemplate,
    CashSnapshot as ORMCashSnapshot,
)


def organization_to_domain(orm_org: ORMOrganization) -> domain.Organization:
    """Convert SQLAlchemy Organization model to domain Organization entity."""
    return domain.Organization(
        id=orm_org.id,
        name=orm_org.name,
        created_at=orm_org.created_at,
    )


def invoice_to_domain(orm_invoice: ORMInvoice) -> domain.Invoice:
    """Convert SQLAlchemy Invoice model to domain Invoice entity."""
    return domain.Invoice(
        id=orm_invoice.id,
        client=orm_invoice.client,
        amount=orm_invoice.amount,
        date_sent=orm_invoice.date_sent,
        due_date=orm_invoice.due_date,
        status=domain.InvoiceStatus(orm_invoice.status),
        paid_on=orm_invoice.paid_on,
        template_id=orm_invoice.template_id,
    )


def apply_invoice(orm_invoice: ORMInvoice, invoice: domain.Invoice) -> ORMInvoice:
    """Copy domain Invoice fields onto a SQLAlchemy Invoice model."""
    orm_invoice.id = invoice.id
    orm_invoice.client = invoice.client
    orm_invoice.amount = invoice.amount
    orm_invoice.date_sent = invoice.date_sent
    orm_invoice.due_date = invoice.due_date
    orm_invoice.status = invoice.status.value
    orm_invoice.paid_on = invoice.paid_on
    orm_invoice.template_id = invoice.template_id
    return orm_invoice


def bill_to_domain(orm_bill: ORMBill) -> domain.Bill:
    """Convert SQLAlchemy Bill model to domain Bill entity."""
    return domain.Bill(
        id=orm_bill.id,
        vendor=orm_bill.vendor,
        amount=orm_bill.amount,
        due_date=orm_bill.due_date,
        status=domain.BillStatus(orm_bill.status),
        priority=domain.BillPriority(orm_bill.priority),
        category=orm_bill.category,
        paid_on=orm_bill.paid_on,
        template_id=orm_bill.template_id,
    )


def apply_bill(orm_bill: ORMBill, bill: domain.Bill) -> ORMBill:
    """Copy domain Bill fields onto a SQLAlchemy Bill model."""
    orm_bill.id = bill.id
    orm_bill.vendor = bill.vendor
    orm_bill.amount = bill.amount
    orm_bill.due_date = bill.due_date
    orm_bill.status = bill.status.value
    orm_bill.priority = bill.priority.value
    orm_bill.category = bill.category
    orm_bill.paid_on = bill.paid_on
    orm_bill.template_id = bill.template_id
    return orm_bill


def template_to_domain(orm_template: ORMRecurringTemplate) -> domain.RecurringTemplate:
    """Convert SQLAlchemy RecurringTemplate model to domain RecurringTemplate entity."""
    return domain.RecurringTemplate(
        id=orm_template.id,
        type=domain.TemplateType(orm_template.type),
        name=orm_template.name,
        amount=orm_template.amount,
        frequency=domain.Frequency(orm_template.frequency),
        start_date=orm_template.start_date,
        active=orm_template.active,
    )


def apply_template(
    orm_template: ORMRecurringTemplate, template: domain.RecurringTemplate
) -> ORMRecurringTemplate:
    """Copy domain RecurringTemplate fields onto a SQLAlchemy model."""
    orm_template.id = template.id
    orm_template.type = template.type.value
    orm_template.name = template.name
    orm_template.amount = template.amount
    orm_template.frequency = template.frequency.value
    orm_template.start_date = template.start_date
    orm_template.active = template.active
    return orm_template


def cash_snapshot_to_domain(orm_snapshot: ORMCashSnapshot) -> domain.CashSnapshot:
    """Convert SQLAlchemy CashSnapshot model to domain CashSnapshot entity."""
    return domain.CashSnapshot(
        balance=orm_snapshot.balance,
        recorded_at=orm_snapshot.recorded_at,
    )

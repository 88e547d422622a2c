"""Validation of ledger records at the ingestion boundary.

The forecasting core assumes records satisfy these rules; services call
them before anything is persisted.
"""

from datetime import date
from decimal import Decimal, localcontext

from cashflow.domain.entities import Bill, Invoice, RecurringTemplate
from cashflow.domain.errors import ValidationError

CENT = Decimal("0.01")


def has_sub_cent_digits(amount: Decimal) -> bool:
    """Whether a finite amount has digits below one cent.

    Amounts are stored with two decimal places, so such values would be
    rounded on save.
    """
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus two decimals
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return amount != amount.quantize(CENT)


def validate_cents(amount: Decimal, label: str = "Amount") -> Decimal:
    """Ensure a finite Decimal has at most two decimal places."""
    if not isinstance(amount, Decimal) or not amount.is_finite():
        raise ValidationError(f"{label} must be a finite decimal number, got {amount!r}")
    if has_sub_cent_digits(amount):
        raise ValidationError(f"{label} must not have more than two decimal places, got {amount}")
    return amount


def validate_amount(amount: Decimal, label: str = "Amount") -> Decimal:
    """Ensure an amount is a strictly positive Decimal in whole cents."""
    validate_cents(amount, label)
    if amount <= 0:
        raise ValidationError(f"{label} must be greater than zero, got {amount}")
    return amount


def validate_name(value: str, label: str) -> str:
    """Ensure a display name is non-empty."""
    if not value or not value.strip():
        raise ValidationError(f"{label} is required")
    return value.strip()


def validate_invoice(invoice: Invoice) -> Invoice:
    """Check invoice invariants.

    Raises:
        ValidationError: If the amount is not positive, the client is empty,
            or the due date precedes the date sent
    """
    validate_name(invoice.client, "Client name")
    validate_amount(invoice.amount)
    if invoice.due_date < invoice.date_sent:
        raise ValidationError(
            f"Due date {invoice.due_date} is before the date sent {invoice.date_sent}"
        )
    return invoice


def validate_bill(bill: Bill) -> Bill:
    """Check bill invariants."""
    validate_name(bill.vendor, "Vendor name")
    validate_amount(bill.amount)
    if not isinstance(bill.due_date, date):
        raise ValidationError(f"Due date must be a date, got {bill.due_date!r}")
    return bill


def validate_template(template: RecurringTemplate) -> RecurringTemplate:
    """Check recurring template invariants."""
    validate_name(template.name, "Template name")
    validate_amount(template.amount)
    return template

"""Tests for recurring template materialization."""

from dataclasses import replace
from datetime import date, timedelta
from decimal import Decimal

from cashflow.domain.entities import (
    BillPriority,
    BillStatus,
    Frequency,
    InvoiceStatus,
    RecurringTemplate,
    TemplateType,
)
from cashflow.domain.recurring import materialize_recurring, next_occurrence, occurrence_id

TODAY = date(2025, 3, 3)


def _template(
    id="TPL-1",
    type=TemplateType.INVOICE,
    frequency=Frequency.WEEKLY,
    start_date=TODAY - timedelta(days=14),
    active=True,
):
    return RecurringTemplate(
        id=id,
        type=type,
        name="Retainer",
        amount=Decimal("4000"),
        frequency=frequency,
        start_date=start_date,
        active=active,
    )


def test_occurrence_id():
    assert occurrence_id("TPL-1", 3) == "TPL-1-3"


class TestNextOccurrence:
    def test_weekly_two_weeks_in(self):
        """Two weeks after the start the next occurrence is the third, 21 days in."""
        template = _template()
        occurrence = next_occurrence(template, TODAY)
        assert occurrence.index == 3
        assert occurrence.entry_id == "TPL-1-3"
        assert occurrence.due_date == template.start_date + timedelta(days=21)

    def test_starting_today(self):
        template = _template(start_date=TODAY)
        occurrence = next_occurrence(template, TODAY)
        assert occurrence.index == 1
        assert occurrence.due_date == TODAY + timedelta(days=7)

    def test_monthly_is_thirty_days(self):
        template = _template(frequency=Frequency.MONTHLY, start_date=date(2025, 1, 31))
        occurrence = next_occurrence(template, date(2025, 2, 15))
        assert occurrence.due_date == date(2025, 3, 2)

    def test_quarterly_is_ninety_days(self):
        template = _template(frequency=Frequency.QUARTERLY, start_date=date(2025, 1, 1))
        assert next_occurrence(template, date(2025, 1, 1)).due_date == date(2025, 4, 1)

    def test_future_start(self):
        assert next_occurrence(_template(start_date=TODAY + timedelta(days=1)), TODAY) is None


class TestMaterializeRecurring:
    def test_creates_one_invoice_within_lookahead(self):
        template = _template()
        result = materialize_recurring([template], [], [], TODAY)

        assert len(result.new_invoices) == 1
        assert result.new_bills == ()
        invoice = result.new_invoices[0]
        assert invoice.id == "TPL-1-3"
        assert invoice.client == "Retainer"
        assert invoice.amount == Decimal("4000")
        assert invoice.date_sent == TODAY
        assert invoice.due_date == TODAY + timedelta(days=7)
        assert invoice.status is InvoiceStatus.SENT
        assert invoice.template_id == "TPL-1"

    def test_bill_template_creates_high_priority_bill(self):
        template = _template(type=TemplateType.BILL)
        result = materialize_recurring([template], [], [], TODAY)

        assert result.new_invoices == ()
        bill = result.new_bills[0]
        assert bill.id == "TPL-1-3"
        assert bill.vendor == "Retainer"
        assert bill.status is BillStatus.UNPAID
        assert bill.priority is BillPriority.HIGH

    def test_outside_lookahead_creates_nothing(self):
        template = _template(frequency=Frequency.MONTHLY, start_date=TODAY - timedelta(days=19))
        # Next occurrence is 11 days away
        assert len(materialize_recurring([template], [], [], TODAY)) == 0
        assert len(materialize_recurring([template], [], [], TODAY, lookahead_days=11)) == 1

    def test_idempotent(self):
        templates = [_template("TPL-1"), _template("TPL-2", type=TemplateType.BILL)]
        first = materialize_recurring(templates, [], [], TODAY)
        assert len(first) == 2

        second = materialize_recurring(
            templates, first.new_invoices, first.new_bills, TODAY
        )
        assert len(second) == 0

    def test_existing_id_of_other_kind_blocks_generation(self):
        """Ids are unique across invoices and bills."""
        first = materialize_recurring([_template(type=TemplateType.BILL)], [], [], TODAY)
        again = materialize_recurring([_template()], [], first.new_bills, TODAY)
        assert len(again) == 0

    def test_paid_occurrence_is_not_regenerated(self):
        first = materialize_recurring([_template()], [], [], TODAY)
        paid = [replace(first.new_invoices[0], status=InvoiceStatus.PAID, paid_on=TODAY)]
        assert len(materialize_recurring([_template()], paid, [], TODAY)) == 0

    def test_inactive_template_skipped(self):
        assert len(materialize_recurring([_template(active=False)], [], [], TODAY)) == 0

    def test_future_template_skipped(self):
        template = _template(start_date=TODAY + timedelta(days=3))
        assert len(materialize_recurring([template], [], [], TODAY)) == 0

    def test_duplicate_template_ids_generate_once(self):
        templates = [_template(), _template()]
        assert len(materialize_recurring(templates, [], [], TODAY)) == 1

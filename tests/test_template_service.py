"""Tests for TemplateService."""

from datetime import timedelta
from decimal import Decimal

import pytest

from cashflow.domain.entities import Frequency, TemplateType
from cashflow.domain.errors import ConflictError, NotFoundError, ValidationError


def _create(template_service, org_id, today, **kwargs):
    params = dict(
        org_id=org_id,
        type=TemplateType.BILL,
        name="Office rent",
        amount=Decimal("2000"),
        frequency=Frequency.MONTHLY,
        start_date=today,
    )
    params.update(kwargs)
    return template_service.create_template(**params)


def test_create_template(template_service, org_id, today):
    template = _create(template_service, org_id, today)
    assert template.id.startswith("TPL-")
    assert template.active
    assert template_service.get_template(org_id, template.id) == template


def test_duplicate_id_rejected(template_service, org_id, today):
    _create(template_service, org_id, today, template_id="RENT")
    with pytest.raises(ConflictError):
        _create(template_service, org_id, today, template_id="RENT")


def test_invalid_amount_rejected(template_service, org_id, today):
    with pytest.raises(ValidationError):
        _create(template_service, org_id, today, amount=Decimal("0"))


def test_list_templates(template_service, org_id, today):
    _create(template_service, org_id, today, name="B rent", template_id="T1")
    _create(template_service, org_id, today, name="A retainer", template_id="T2")
    template_service.deactivate_template(org_id, "T1")

    assert [t.id for t in template_service.list_templates(org_id)] == ["T2", "T1"]
    assert [t.id for t in template_service.list_templates(org_id, active_only=True)] == ["T2"]


def test_deactivate_template(template_service, org_id, today):
    _create(template_service, org_id, today, template_id="T1")
    template = template_service.deactivate_template(org_id, "T1")
    assert not template.active
    assert not template_service.get_template(org_id, "T1").active
    # Deactivating twice is harmless
    assert not template_service.deactivate_template(org_id, "T1").active


def test_deactivated_template_stops_generating(
    template_service, ledger_service, org_id, today
):
    _create(
        template_service,
        org_id,
        today,
        template_id="T1",
        frequency=Frequency.WEEKLY,
        start_date=today - timedelta(days=3),
    )
    template_service.deactivate_template(org_id, "T1")
    assert not ledger_service.refresh(org_id, today).changed


def test_delete_template_keeps_entries(template_service, ledger_service, org_id, today):
    _create(
        template_service,
        org_id,
        today,
        template_id="T1",
        frequency=Frequency.WEEKLY,
        start_date=today - timedelta(days=3),
    )
    ledger_service.refresh(org_id, today)
    template_service.delete_template(org_id, "T1")

    assert template_service.get_template(org_id, "T1") is None
    bills = ledger_service.list_bills(org_id)
    assert [bill.id for bill in bills] == ["T1-1"]
    assert bills[0].template_id == "T1"


def test_missing_template(template_service, org_id):
    with pytest.raises(NotFoundError, match="Template 'NOPE' not found"):
        template_service.deactivate_template(org_id, "NOPE")
    with pytest.raises(NotFoundError):
        template_service.delete_template(org_id, "NOPE")

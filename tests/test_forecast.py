"""Tests for the weekly cash forecast."""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from cashflow.domain.entities import Bill, BillStatus, Invoice, InvoiceStatus
from cashflow.domain.errors import ValidationError
from cashflow.domain.forecast import DEFAULT_HORIZON_WEEKS, compute_forecast

TODAY = date(2025, 3, 3)


def _invoice(id, amount, due_in_days, status=InvoiceStatus.SENT):
    return Invoice(
        id=id,
        client="Client",
        amount=Decimal(amount),
        date_sent=TODAY - timedelta(days=30),
        due_date=TODAY + timedelta(days=due_in_days),
        status=status,
    )


def _bill(id, amount, due_in_days, status=BillStatus.UNPAID):
    return Bill(
        id=id,
        vendor="Vendor",
        amount=Decimal(amount),
        due_date=TODAY + timedelta(days=due_in_days),
        status=status,
    )


@pytest.fixture
def ledger():
    invoices = [
        _invoice("INV-1", "500", 0),
        _invoice("INV-2", "250", 6),
        _invoice("INV-3", "800", 20, InvoiceStatus.OVERDUE),
        _invoice("INV-4", "9999", 3, InvoiceStatus.PAID),
    ]
    bills = [
        _bill("BILL-1", "300", 7),
        _bill("BILL-2", "2000", 15),
        _bill("BILL-3", "7777", 1, BillStatus.PAID),
    ]
    return invoices, bills


def test_default_horizon(ledger):
    invoices, bills = ledger
    forecast = compute_forecast(Decimal("1000"), invoices, bills, TODAY)
    assert len(forecast) == DEFAULT_HORIZON_WEEKS == 12
    assert len(list(forecast)) == 12


def test_windows_are_consecutive_weeks(ledger):
    invoices, bills = ledger
    weeks = list(compute_forecast(Decimal("1000"), invoices, bills, TODAY, 4))

    assert [w.week_index for w in weeks] == [0, 1, 2, 3]
    assert weeks[0].window_start == TODAY
    assert weeks[0].window_end == TODAY + timedelta(days=6)
    assert weeks[1].window_start == TODAY + timedelta(days=7)
    assert weeks[3].window_end == TODAY + timedelta(days=27)


def test_flows_bucketed_by_due_date(ledger):
    invoices, bills = ledger
    weeks = list(compute_forecast(Decimal("1000"), invoices, bills, TODAY, 4))

    assert weeks[0].inflow == Decimal("750")
    assert weeks[0].outflow == Decimal("0")
    assert weeks[1].outflow == Decimal("300")
    assert weeks[2].inflow == Decimal("800")
    assert weeks[2].outflow == Decimal("2000")
    assert weeks[3].net_change == Decimal("0")


def test_running_balance(ledger):
    invoices, bills = ledger
    weeks = list(compute_forecast(Decimal("1000"), invoices, bills, TODAY, 4))
    assert [w.ending_balance for w in weeks] == [
        Decimal("1750"),
        Decimal("1450"),
        Decimal("250"),
        Decimal("250"),
    ]


def test_ending_balance_is_opening_plus_net_changes(ledger):
    invoices, bills = ledger
    forecast = compute_forecast(Decimal("1000"), invoices, bills, TODAY, 8)
    weeks = list(forecast)
    assert weeks[-1].ending_balance == Decimal("1000") + sum(w.net_change for w in weeks)
    assert forecast.ending_balance == weeks[-1].ending_balance
    for week in weeks:
        assert week.net_change == week.inflow - week.outflow


def test_entries_outside_horizon_and_overdue_ignored():
    invoices = [_invoice("INV-1", "100", -3, InvoiceStatus.OVERDUE), _invoice("INV-2", "100", 30)]
    weeks = list(compute_forecast(Decimal("0"), invoices, [], TODAY, 2))
    assert all(w.inflow == 0 for w in weeks)


def test_iteration_is_restartable(ledger):
    invoices, bills = ledger
    forecast = compute_forecast(Decimal("1000"), invoices, bills, TODAY, 4)
    assert list(forecast) == list(forecast)
    assert forecast[2] == list(forecast)[2]
    assert forecast[-1].week_index == 3


def test_zero_horizon():
    forecast = compute_forecast(Decimal("123"), [], [], TODAY, 0)
    assert list(forecast) == []
    assert forecast.ending_balance == Decimal("123")
    assert forecast.first_negative_week is None


def test_negative_horizon_rejected():
    with pytest.raises(ValidationError):
        compute_forecast(Decimal("0"), [], [], TODAY, -1)


def test_lowest_balance_and_first_negative_week():
    bills = [_bill("BILL-1", "1500", 8)]
    invoices = [_invoice("INV-1", "2000", 16)]
    forecast = compute_forecast(Decimal("1000"), invoices, bills, TODAY, 4)

    assert forecast.lowest_balance == Decimal("-500")
    negative = forecast.first_negative_week
    assert negative.week_index == 1
    assert negative.ending_balance == Decimal("-500")


def test_invalid_records_excluded_with_warning():
    invoices = [
        _invoice("INV-1", "100", 1),
        Invoice(
            id="INV-BAD",
            client="Client",
            amount=Decimal("-5"),
            date_sent=TODAY,
            due_date=TODAY,
        ),
    ]
    bills = [
        Bill(
            id="BILL-BAD",
            vendor="Vendor",
            amount=Decimal("10"),
            due_date=datetime(2025, 3, 4, 12, 0),
        )
    ]
    forecast = compute_forecast(Decimal("0"), invoices, bills, TODAY, 1)

    assert forecast[0].inflow == Decimal("100")
    assert forecast[0].outflow == Decimal("0")
    assert len(forecast.warnings) == 2
    assert any("INV-BAD" in w for w in forecast.warnings)
    assert any("BILL-BAD" in w for w in forecast.warnings)


def test_accepts_plain_number_cash():
    forecast = compute_forecast(1000, [], [], TODAY, 1)
    assert forecast[0].ending_balance == Decimal("1000")

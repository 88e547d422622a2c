"""Tests for runway estimation."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from cashflow.domain.entities import Bill, BillStatus
from cashflow.domain.runway import (
    RunwaySettings,
    compute_runway,
    historical_weekly_burn,
    to_decimal,
)

TODAY = date(2025, 3, 3)


class TestComputeRunway:
    def test_burn_from_unpaid_bills(self):
        """15000 of cash against 450 of bills burns 112.5 a week."""
        assert compute_runway(Decimal("15000"), Decimal("450")) == Decimal("133.3")

    def test_default_burn_without_bills(self):
        assert compute_runway(Decimal("5000"), Decimal("0")) == Decimal("5.0")

    def test_capped(self):
        assert compute_runway(Decimal("10000000"), Decimal("4")) == Decimal("999.0")

    def test_negative_cash_clamped_to_zero(self):
        assert compute_runway(Decimal("-500"), Decimal("400")) == Decimal("0.0")

    def test_rounds_half_up(self):
        # 125 / 100 = 1.25
        assert compute_runway(Decimal("125"), Decimal("400")) == Decimal("1.3")

    def test_accepts_plain_numbers(self):
        assert compute_runway(15000, 450) == Decimal("133.3")
        assert compute_runway("15000", 450.0) == Decimal("133.3")

    def test_historical_burn_preferred(self):
        assert compute_runway(Decimal("1000"), Decimal("4000"), Decimal("100")) == Decimal("10.0")

    def test_zero_historical_burn_falls_back_to_bills(self):
        assert compute_runway(Decimal("1000"), Decimal("400"), Decimal("0")) == Decimal("10.0")

    def test_zero_burn_reports_cap(self):
        """No history and no bills with explicit zero history means nothing is spent."""
        assert compute_runway(Decimal("1000"), Decimal("0"), Decimal("0")) == Decimal("999.0")

    def test_custom_settings(self):
        settings = RunwaySettings(default_weekly_burn=Decimal("250"), runway_cap=Decimal("10"))
        assert compute_runway(Decimal("1000"), Decimal("0"), settings=settings) == Decimal("4.0")
        assert compute_runway(Decimal("5000"), Decimal("0"), settings=settings) == Decimal("10.0")

    def test_result_has_one_decimal(self):
        runway = compute_runway(Decimal("1000"), Decimal("3"))
        assert runway.as_tuple().exponent == -1

    def test_very_large_cap_on_zero_burn(self):
        settings = RunwaySettings(runway_cap=Decimal("1e30"))
        runway = compute_runway(Decimal("100"), Decimal("0"), Decimal("0"), settings=settings)
        assert runway == Decimal("1e30")
        assert runway.as_tuple().exponent == -1

    def test_very_large_runway_below_cap(self):
        settings = RunwaySettings(runway_cap=Decimal("1e50"))
        runway = compute_runway(Decimal("1e40"), Decimal("4000"), settings=settings)
        assert runway == Decimal("1e37")


class TestHistoricalWeeklyBurn:
    def _paid_bill(self, id, amount, paid_on):
        return Bill(
            id=id,
            vendor="Vendor",
            amount=Decimal(amount),
            due_date=paid_on,
            status=BillStatus.PAID,
            paid_on=paid_on,
        )

    def test_sums_bills_paid_in_window(self):
        bills = [
            self._paid_bill("B1", "1000", TODAY - timedelta(days=2)),
            self._paid_bill("B2", "600", TODAY - timedelta(days=30)),
            self._paid_bill("B3", "9999", TODAY - timedelta(days=31)),
            Bill(id="B4", vendor="Vendor", amount=Decimal("500"), due_date=TODAY),
        ]
        assert historical_weekly_burn(bills, TODAY) == Decimal("400")

    def test_none_without_history(self):
        assert historical_weekly_burn([], TODAY) is None


def test_to_decimal_avoids_float_artifacts():
    assert to_decimal(0.1) == Decimal("0.1")
    value = Decimal("2.50")
    assert to_decimal(value) is value


@pytest.mark.parametrize(
    "cash,unpaid",
    [("0", "0"), ("-1", "0"), ("1e9", "0.01"), ("100", "1e-9")],
)
def test_runway_always_within_bounds(cash, unpaid):
    runway = compute_runway(Decimal(cash), Decimal(unpaid))
    assert Decimal("0") <= runway <= Decimal("999")
    assert runway.is_finite()

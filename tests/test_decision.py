"""Tests for expense decision simulation."""

from decimal import Decimal

from cashflow.domain.decision import simulate_decision
from cashflow.domain.entities import DecisionOutcome
from cashflow.domain.runway import RunwaySettings


def test_rejected_when_cash_runs_out():
    decision = simulate_decision(Decimal("5000"), Decimal("2000"), Decimal("6000"))
    assert decision.outcome is DecisionOutcome.REJECTED
    assert decision.deficit == Decimal("1000")
    assert decision.current_runway == Decimal("10.0")
    assert decision.new_runway == Decimal("0.0")


def test_risky_when_runway_drops_below_threshold():
    decision = simulate_decision(Decimal("5000"), Decimal("2000"), Decimal("3500"))
    assert decision.outcome is DecisionOutcome.RISKY
    assert decision.new_runway == Decimal("3.0")
    assert decision.deficit is None


def test_approved():
    decision = simulate_decision(Decimal("5000"), Decimal("2000"), Decimal("1000"))
    assert decision.outcome is DecisionOutcome.APPROVED
    assert decision.proposed_expense == Decimal("1000")
    assert decision.new_runway == Decimal("8.0")
    assert decision.deficit is None


def test_spending_everything_is_risky_not_rejected():
    decision = simulate_decision(Decimal("5000"), Decimal("2000"), Decimal("5000"))
    assert decision.outcome is DecisionOutcome.RISKY


def test_exactly_at_threshold_is_approved():
    # 2000 / 500 = 4.0 weeks
    decision = simulate_decision(Decimal("5000"), Decimal("2000"), Decimal("3000"))
    assert decision.outcome is DecisionOutcome.APPROVED


def test_uses_default_burn_without_bills():
    decision = simulate_decision(Decimal("5000"), Decimal("0"), Decimal("2000"))
    assert decision.new_runway == Decimal("3.0")
    assert decision.outcome is DecisionOutcome.RISKY


def test_custom_threshold():
    settings = RunwaySettings(risky_threshold_weeks=Decimal("2"))
    decision = simulate_decision(
        Decimal("5000"), Decimal("2000"), Decimal("3500"), settings=settings
    )
    assert decision.outcome is DecisionOutcome.APPROVED

"""What-if simulation of a one-time expense."""

from cashflow.domain.entities import Decision, DecisionOutcome
from cashflow.domain.runway import (
    DEFAULT_SETTINGS,
    Number,
    RunwaySettings,
    compute_runway,
    to_decimal,
)


def simulate_decision(
    cash_balance: Number,
    total_unpaid_bills: Number,
    proposed_expense: Number,
    settings: RunwaySettings = DEFAULT_SETTINGS,
) -> Decision:
    """Classify a proposed expense against the runway thresholds.

    The first matching rule wins: a negative resulting balance rejects the
    expense, a runway below ``settings.risky_threshold_weeks`` flags it as
    risky, anything else is approved.
    """
    cash = to_decimal(cash_balance)
    expense = to_decimal(proposed_expense)
    remaining = cash - expense

    current_runway = compute_runway(cash, total_unpaid_bills, settings=settings)
    new_runway = compute_runway(remaining, total_unpaid_bills, settings=settings)

    if remaining < 0:
        outcome = DecisionOutcome.REJECTED
    elif new_runway < settings.risky_threshold_weeks:
        outcome = DecisionOutcome.RISKY
    else:
        outcome = DecisionOutcome.APPROVED

    return Decision(
        outcome=outcome,
        proposed_expense=expense,
        current_runway=current_runway,
        new_runway=new_runway,
        deficit=-remaining if outcome is DecisionOutcome.REJECTED else None,
    )

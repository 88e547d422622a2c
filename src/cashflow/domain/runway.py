"""Runway (weeks of cash) estimation."""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Iterable, Optional, Union

from cashflow.domain.entities import Bill

logger = logging.getLogger(__name__)

Number = Union[Decimal, int, float, str]

ONE_DECIMAL = Decimal("0.1")
HISTORY_WINDOW_DAYS = 30


@dataclass(frozen=True)
class RunwaySettings:
    """Heuristic constants of the runway model.

    Attributes:
        default_weekly_burn: Burn assumed when there are no unpaid bills and no
            payment history
        runway_cap: Upper bound on reported runway, also returned when the burn
            rate is zero
        risky_threshold_weeks: Runway below which a decision is risky and the
            dashboard raises an alert
        burn_divisor: Weeks a month of bills is spread over
    """

    default_weekly_burn: Decimal = Decimal("1000")
    runway_cap: Decimal = Decimal("999")
    risky_threshold_weeks: Decimal = Decimal("4")
    burn_divisor: Decimal = Decimal("4")


DEFAULT_SETTINGS = RunwaySettings()


def to_decimal(value: Number) -> Decimal:
    """Coerce a numeric value to Decimal without float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _round_weeks(weeks: Decimal) -> Decimal:
    with localcontext() as ctx:
        # Large caps need more than the default 28 digits at one decimal place
        ctx.prec = max(ctx.prec, weeks.adjusted() + 2)
        return weeks.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)


def compute_runway(
    cash_balance: Number,
    total_unpaid_bills: Number,
    historical_weekly_burn: Optional[Number] = None,
    settings: RunwaySettings = DEFAULT_SETTINGS,
) -> Decimal:
    """Estimate how many weeks the cash balance lasts.

    Args:
        cash_balance: Current cash
        total_unpaid_bills: Sum of outstanding bills
        historical_weekly_burn: Weekly burn measured from recent payments, if
            the caller has payment history
        settings: Runway heuristics

    Returns:
        Runway in weeks, rounded to one decimal and clamped to
        ``[0, settings.runway_cap]``. Never NaN or infinite.
    """
    cash = to_decimal(cash_balance)
    fallback_burn = to_decimal(total_unpaid_bills) / settings.burn_divisor

    if historical_weekly_burn is not None:
        weekly_burn = to_decimal(historical_weekly_burn) or fallback_burn
    else:
        weekly_burn = fallback_burn or settings.default_weekly_burn

    if weekly_burn <= 0:
        logger.debug("Zero burn rate, reporting capped runway")
        return _round_weeks(settings.runway_cap)

    runway = cash / weekly_burn
    runway = min(max(runway, Decimal("0")), settings.runway_cap)
    return _round_weeks(runway)


def historical_weekly_burn(
    bills: Iterable[Bill],
    today: date,
    window_days: int = HISTORY_WINDOW_DAYS,
    settings: RunwaySettings = DEFAULT_SETTINGS,
) -> Optional[Decimal]:
    """Weekly burn from bills paid in the last ``window_days`` days.

    Returns:
        Total paid in the window divided by ``settings.burn_divisor``, or None
        if no bill was paid in the window
    """
    since = today - timedelta(days=window_days)
    paid = [
        bill.amount
        for bill in bills
        if bill.is_paid and bill.paid_on is not None and since <= bill.paid_on <= today
    ]
    if not paid:
        return None
    return sum(paid, Decimal("0")) / settings.burn_divisor

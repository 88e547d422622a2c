"""Weekly cash flow projection."""

import logging
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Iterator, NamedTuple, Optional, Sequence, Union

from cashflow.domain.entities import Bill, Invoice, WeekProjection
from cashflow.domain.errors import DataError, ValidationError
from cashflow.domain.runway import Number, to_decimal

logger = logging.getLogger(__name__)

DEFAULT_HORIZON_WEEKS = 12
DAYS_PER_WEEK = 7


class _Flow(NamedTuple):
    due_date: date
    amount: Decimal


def _to_flow(entry: Union[Invoice, Bill], kind: str) -> _Flow:
    """Validate the fields the forecast aggregates.

    Raises:
        DataError: If the due date or amount breaks a ledger invariant
    """
    due_date = getattr(entry, "due_date", None)
    if isinstance(due_date, datetime) or not isinstance(due_date, date):
        raise DataError(f"{kind} '{entry.id}' has an invalid due date: {due_date!r}")

    amount = getattr(entry, "amount", None)
    try:
        amount = to_decimal(amount)
    except (ArithmeticError, ValueError, TypeError):
        raise DataError(f"{kind} '{entry.id}' has an invalid amount: {amount!r}")
    if not amount.is_finite() or amount <= 0:
        raise DataError(f"{kind} '{entry.id}' has a non-positive amount: {amount}")

    return _Flow(due_date, amount)


def _collect_flows(
    entries: Iterable[Union[Invoice, Bill]], kind: str, warnings: list[str]
) -> tuple[_Flow, ...]:
    flows = []
    for entry in entries:
        if entry.is_paid:
            continue
        try:
            flows.append(_to_flow(entry, kind))
        except DataError as e:
            logger.warning("Excluded from forecast: %s", e)
            warnings.append(str(e))
    return tuple(flows)


class Forecast(Sequence[WeekProjection]):
    """Lazy weekly projection of the cash balance.

    Weeks are computed on iteration, so the sequence can be iterated any
    number of times and always yields the same records.
    """

    def __init__(
        self,
        cash_balance: Decimal,
        today: date,
        horizon_weeks: int,
        inflows: tuple[_Flow, ...],
        outflows: tuple[_Flow, ...],
        warnings: tuple[str, ...] = (),
    ):
        self.cash_balance = cash_balance
        self.today = today
        self.horizon_weeks = horizon_weeks
        self.warnings = warnings
        self._inflows = inflows
        self._outflows = outflows

    def __iter__(self) -> Iterator[WeekProjection]:
        balance = self.cash_balance
        for week_index in range(self.horizon_weeks):
            projection = self._project_week(week_index, balance)
            balance = projection.ending_balance
            yield projection

    def __len__(self) -> int:
        return self.horizon_weeks

    def __getitem__(self, index):
        weeks = list(self)
        return weeks[index]

    def _project_week(self, week_index: int, opening_balance: Decimal) -> WeekProjection:
        window_start = self.today + timedelta(days=DAYS_PER_WEEK * week_index)
        window_end = window_start + timedelta(days=DAYS_PER_WEEK - 1)

        inflow = sum(
            (f.amount for f in self._inflows if window_start <= f.due_date <= window_end),
            Decimal("0"),
        )
        outflow = sum(
            (f.amount for f in self._outflows if window_start <= f.due_date <= window_end),
            Decimal("0"),
        )
        net_change = inflow - outflow
        return WeekProjection(
            week_index=week_index,
            window_start=window_start,
            window_end=window_end,
            inflow=inflow,
            outflow=outflow,
            net_change=net_change,
            ending_balance=opening_balance + net_change,
        )

    @property
    def ending_balance(self) -> Decimal:
        """Balance at the end of the horizon."""
        balance = self.cash_balance
        for projection in self:
            balance = projection.ending_balance
        return balance

    @property
    def lowest_balance(self) -> Decimal:
        """Lowest projected balance, including the opening balance."""
        return min([self.cash_balance] + [p.ending_balance for p in self])

    @property
    def first_negative_week(self) -> Optional[WeekProjection]:
        """First week whose ending balance drops below zero, if any."""
        for projection in self:
            if projection.ending_balance < 0:
                return projection
        return None


def compute_forecast(
    cash_balance: Number,
    invoices: Iterable[Invoice],
    bills: Iterable[Bill],
    today: date,
    horizon_weeks: int = DEFAULT_HORIZON_WEEKS,
) -> Forecast:
    """Project the cash balance week by week.

    Week ``i`` covers ``[today + 7i, today + 7i + 6]`` inclusive. Unpaid
    invoices due in the window are inflows, unpaid bills due in the window
    are outflows. Records with an invalid due date or amount are left out and
    listed in ``Forecast.warnings``.

    Args:
        cash_balance: Opening balance
        invoices: Invoices; paid ones are ignored
        bills: Bills; paid ones are ignored
        today: First day of the first window
        horizon_weeks: Number of weekly windows

    Returns:
        Forecast sequence of ``horizon_weeks`` WeekProjection records

    Raises:
        ValidationError: If horizon_weeks is negative
    """
    if horizon_weeks < 0:
        raise ValidationError(f"Forecast horizon must not be negative: {horizon_weeks}")

    warnings: list[str] = []
    inflows = _collect_flows(invoices, "Invoice", warnings)
    outflows = _collect_flows(bills, "Bill", warnings)

    return Forecast(
        cash_balance=to_decimal(cash_balance),
        today=today,
        horizon_weeks=horizon_weeks,
        inflows=inflows,
        outflows=outflows,
        warnings=tuple(warnings),
    )

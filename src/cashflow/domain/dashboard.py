"""Dashboard domain service: KPIs, forecast, decisions and reviews."""

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from cashflow.database.base import Database
from cashflow.domain.decision import simulate_decision
from cashflow.domain.entities import (
    Alert,
    AlertKind,
    Bill,
    DashboardKPIs,
    Decision,
    HistoryWeek,
    InvoiceStatus,
    Ledger,
    WeeklyReview,
)
from cashflow.domain.forecast import DEFAULT_HORIZON_WEEKS, Forecast, compute_forecast
from cashflow.domain.ledger import LedgerService
from cashflow.domain.runway import (
    DEFAULT_SETTINGS,
    RunwaySettings,
    compute_runway,
    historical_weekly_burn,
)
from cashflow.domain.status import resolve_statuses
from cashflow.domain.validation import validate_amount

logger = logging.getLogger(__name__)

DUE_SOON_DAYS = 7
HISTORY_WEEKS = 8


def bills_due_within(bills: tuple[Bill, ...], today: date, days: int) -> list[Bill]:
    """Unpaid bills due between today and ``today + days`` inclusive."""
    horizon = today + timedelta(days=days)
    return [bill for bill in bills if not bill.is_paid and today <= bill.due_date <= horizon]


class DashboardService:
    """Service assembling the read-side views of a ledger."""

    def __init__(self, db: Database, settings: RunwaySettings = DEFAULT_SETTINGS):
        """Initialize dashboard service.

        Args:
            db: Database instance
            settings: Runway heuristics
        """
        self.db = db
        self.settings = settings
        self.ledger_service = LedgerService(db)

    def _load(self, org_id: int, today: date) -> Ledger:
        # Statuses are resolved in memory so views are current without a refresh
        ledger = self.ledger_service.load_ledger(org_id)
        return Ledger(
            cash_balance=ledger.cash_balance,
            invoices=tuple(resolve_statuses(ledger.invoices, today)),
            bills=ledger.bills,
            templates=ledger.templates,
        )

    def build_kpis(self, org_id: int, today: date) -> DashboardKPIs:
        """Compute the headline figures and the most pressing alert.

        Runway prefers the burn measured from bills paid in the last 30 days
        and falls back to outstanding bills.
        """
        ledger = self._load(org_id, today)
        burn = historical_weekly_burn(ledger.bills, today, settings=self.settings)
        runway = compute_runway(
            ledger.cash_balance, ledger.total_payables, burn, settings=self.settings
        )

        overdue_count = sum(1 for inv in ledger.invoices if inv.status is InvoiceStatus.OVERDUE)
        due_soon_count = len(bills_due_within(ledger.bills, today, DUE_SOON_DAYS))

        return DashboardKPIs(
            cash=ledger.cash_balance,
            total_receivables=ledger.total_receivables,
            total_payables=ledger.total_payables,
            runway_weeks=runway,
            overdue_invoice_count=overdue_count,
            bills_due_soon_count=due_soon_count,
            alert=self._choose_alert(overdue_count, due_soon_count, runway),
        )

    def _choose_alert(
        self, overdue_count: int, due_soon_count: int, runway: Decimal
    ) -> Optional[Alert]:
        if overdue_count > 0:
            return Alert(
                AlertKind.OVERDUE_INVOICES,
                f"You have {overdue_count} overdue invoice(s) needing attention.",
            )
        if due_soon_count > 0:
            return Alert(
                AlertKind.BILLS_DUE_SOON,
                f"{due_soon_count} bill(s) are due in the next {DUE_SOON_DAYS} days.",
            )
        if runway < self.settings.risky_threshold_weeks:
            return Alert(
                AlertKind.LOW_RUNWAY,
                f"Cash runway is low ({runway} weeks). Review expenses immediately.",
            )
        return None

    def build_forecast(
        self, org_id: int, today: date, horizon_weeks: int = DEFAULT_HORIZON_WEEKS
    ) -> Forecast:
        """Project the organization's cash balance week by week."""
        ledger = self._load(org_id, today)
        forecast = compute_forecast(
            ledger.cash_balance, ledger.invoices, ledger.bills, today, horizon_weeks
        )
        logger.debug(
            "Forecast from %s over %d weeks ends at %s",
            today,
            horizon_weeks,
            forecast.ending_balance,
        )
        return forecast

    def runway(self, org_id: int, today: date) -> Decimal:
        """Runway in weeks, using payment history when available."""
        return self.build_kpis(org_id, today).runway_weeks

    def simulate_expense(self, org_id: int, proposed_expense: Decimal) -> Decision:
        """Evaluate a one-time expense against the current cash and bills.

        Raises:
            ValidationError: If the expense is not a positive amount
        """
        validate_amount(proposed_expense, "Proposed expense")
        ledger = self.ledger_service.load_ledger(org_id)
        return simulate_decision(
            ledger.cash_balance,
            ledger.total_payables,
            proposed_expense,
            settings=self.settings,
        )

    def weekly_review(self, org_id: int, today: date) -> WeeklyReview:
        """Summarize invoices to chase and bills to pay this week."""
        ledger = self._load(org_id, today)
        horizon = today + timedelta(days=DUE_SOON_DAYS)
        urgent = [bill for bill in ledger.unpaid_bills if bill.due_date <= horizon]
        return WeeklyReview(
            cash=ledger.cash_balance,
            outstanding_invoices=ledger.unpaid_invoices,
            urgent_bills=tuple(urgent),
            total_receivables=ledger.total_receivables,
            total_payables=ledger.total_payables,
        )

    def cash_history(
        self, org_id: int, today: date, weeks: int = HISTORY_WEEKS
    ) -> list[HistoryWeek]:
        """Money received and paid per past week, oldest first.

        Entries are bucketed by their payment date.
        """
        ledger = self.ledger_service.load_ledger(org_id)
        start = today - timedelta(days=7 * weeks)

        history = []
        for i in range(weeks):
            window_start = start + timedelta(days=7 * i)
            window_end = window_start + timedelta(days=6)
            received = sum(
                (
                    inv.amount
                    for inv in ledger.invoices
                    if inv.is_paid
                    and inv.paid_on is not None
                    and window_start <= inv.paid_on <= window_end
                ),
                Decimal("0"),
            )
            paid = sum(
                (
                    bill.amount
                    for bill in ledger.bills
                    if bill.is_paid
                    and bill.paid_on is not None
                    and window_start <= bill.paid_on <= window_end
                ),
                Decimal("0"),
            )
            history.append(
                HistoryWeek(
                    window_start=window_start,
                    window_end=window_end,
                    received=received,
                    paid=paid,
                )
            )
        return history

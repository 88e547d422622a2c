"""Domain model entities for cashflow.

These are pure data classes representing business concepts, independent of
database schema. The forecasting core only ever sees these values, so the
persistence layer can change without touching the computations.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class InvoiceStatus(str, Enum):
    """Lifecycle of a receivable."""

    SENT = "Sent"
    OVERDUE = "Overdue"
    PAID = "Paid"


class BillStatus(str, Enum):
    """Lifecycle of a payable."""

    UNPAID = "Unpaid"
    PAID = "Paid"


class BillPriority(str, Enum):
    """Payment priority of a bill."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class TemplateType(str, Enum):
    """Kind of entry a recurring template produces."""

    INVOICE = "invoice"
    BILL = "bill"


class Frequency(str, Enum):
    """Recurrence frequency of a template.

    Monthly and quarterly are fixed 30 and 90 day buckets, not calendar months.
    """

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"

    @property
    def interval_days(self) -> int:
        return FREQUENCY_INTERVAL_DAYS[self]


FREQUENCY_INTERVAL_DAYS = {
    Frequency.WEEKLY: 7,
    Frequency.MONTHLY: 30,
    Frequency.QUARTERLY: 90,
}


class DecisionOutcome(str, Enum):
    """Classification of a proposed one-time expense."""

    APPROVED = "Approved"
    RISKY = "Risky"
    REJECTED = "Rejected"


class AlertKind(str, Enum):
    """Dashboard alert categories, in precedence order."""

    OVERDUE_INVOICES = "overdue_invoices"
    BILLS_DUE_SOON = "bills_due_soon"
    LOW_RUNWAY = "low_runway"


@dataclass(frozen=True)
class Organization:
    """Organization owning a ledger."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Invoice:
    """Invoice (accounts receivable) domain entity."""

    id: str
    client: str
    amount: Decimal
    date_sent: date
    due_date: date
    status: InvoiceStatus = InvoiceStatus.SENT
    paid_on: Optional[date] = None
    template_id: Optional[str] = None

    @property
    def is_paid(self) -> bool:
        return self.status is InvoiceStatus.PAID


@dataclass(frozen=True)
class Bill:
    """Bill (accounts payable) domain entity."""

    id: str
    vendor: str
    amount: Decimal
    due_date: date
    status: BillStatus = BillStatus.UNPAID
    priority: BillPriority = BillPriority.MEDIUM
    category: Optional[str] = None
    paid_on: Optional[date] = None
    template_id: Optional[str] = None

    @property
    def is_paid(self) -> bool:
        return self.status is BillStatus.PAID


@dataclass(frozen=True)
class RecurringTemplate:
    """Template that generates one invoice or bill per occurrence."""

    id: str
    type: TemplateType
    name: str
    amount: Decimal
    frequency: Frequency
    start_date: date
    active: bool = True


@dataclass(frozen=True)
class CashSnapshot:
    """Recorded cash balance. The most recent one is authoritative."""

    balance: Decimal
    recorded_at: datetime


@dataclass(frozen=True)
class Ledger:
    """Snapshot of one organization's receivables, payables and cash.

    Threaded explicitly through the forecasting functions; nothing in the
    core keeps a ledger between calls.
    """

    cash_balance: Decimal = Decimal("0")
    invoices: tuple[Invoice, ...] = ()
    bills: tuple[Bill, ...] = ()
    templates: tuple[RecurringTemplate, ...] = ()

    @property
    def unpaid_invoices(self) -> tuple[Invoice, ...]:
        return tuple(inv for inv in self.invoices if not inv.is_paid)

    @property
    def unpaid_bills(self) -> tuple[Bill, ...]:
        return tuple(bill for bill in self.bills if not bill.is_paid)

    @property
    def total_receivables(self) -> Decimal:
        return sum((inv.amount for inv in self.unpaid_invoices), Decimal("0"))

    @property
    def total_payables(self) -> Decimal:
        return sum((bill.amount for bill in self.unpaid_bills), Decimal("0"))


@dataclass(frozen=True)
class Occurrence:
    """Next scheduled occurrence of a recurring template."""

    template_id: str
    index: int
    entry_id: str
    due_date: date


@dataclass(frozen=True)
class MaterializedEntries:
    """Entries generated from recurring templates, ready to persist."""

    new_invoices: tuple[Invoice, ...] = ()
    new_bills: tuple[Bill, ...] = ()

    def __len__(self) -> int:
        return len(self.new_invoices) + len(self.new_bills)


@dataclass(frozen=True)
class WeekProjection:
    """One weekly bucket of the cash forecast."""

    week_index: int
    window_start: date
    window_end: date
    inflow: Decimal
    outflow: Decimal
    net_change: Decimal
    ending_balance: Decimal


@dataclass(frozen=True)
class Decision:
    """Result of simulating a one-time expense.

    ``deficit`` is set only for rejected decisions.
    """

    outcome: DecisionOutcome
    proposed_expense: Decimal
    current_runway: Decimal
    new_runway: Decimal
    deficit: Optional[Decimal] = None


@dataclass(frozen=True)
class RefreshResult:
    """Delta produced by one pass of status resolution and materialization."""

    overdue_invoices: tuple[Invoice, ...] = ()
    new_invoices: tuple[Invoice, ...] = ()
    new_bills: tuple[Bill, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.overdue_invoices or self.new_invoices or self.new_bills)


@dataclass(frozen=True)
class Alert:
    """Dashboard alert."""

    kind: AlertKind
    message: str


@dataclass(frozen=True)
class PaymentReminder:
    """Reminder message for an unpaid invoice, ready to send to the client."""

    invoice_id: str
    client: str
    subject: str
    body: str


@dataclass(frozen=True)
class DashboardKPIs:
    """Headline figures for the dashboard."""

    cash: Decimal
    total_receivables: Decimal
    total_payables: Decimal
    runway_weeks: Decimal
    overdue_invoice_count: int
    bills_due_soon_count: int
    alert: Optional[Alert] = None


@dataclass(frozen=True)
class WeeklyReview:
    """Weekly review summary: what to chase and what to pay."""

    cash: Decimal
    outstanding_invoices: tuple[Invoice, ...]
    urgent_bills: tuple[Bill, ...]
    total_receivables: Decimal
    total_payables: Decimal

    @property
    def is_healthy(self) -> bool:
        return self.cash + self.total_receivables > self.total_payables


@dataclass(frozen=True)
class HistoryWeek:
    """Paid receivables and payables for one past week."""

    window_start: date
    window_end: date
    received: Decimal
    paid: Decimal
    net: Decimal = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "net", self.received - self.paid)

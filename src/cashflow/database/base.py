"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from cashflow.domain.entities import (
    Bill,
    CashSnapshot,
    Invoice,
    Organization,
    RecurringTemplate,
)


class Database(ABC):
    """Abstract database interface for cashflow.

    Every ledger operation is scoped to an organization. Read accessors
    return domain entities; the ``save_*`` methods insert new records and
    update existing ones with the same id.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Organization operations
    @abstractmethod
    def create_organization(self, name: str) -> int:
        """Create an organization. Returns organization ID."""
        pass

    @abstractmethod
    def get_organization_by_name(self, name: str) -> Optional[Organization]:
        """Get organization by name."""
        pass

    # Invoice operations
    @abstractmethod
    def list_invoices(self, org_id: int) -> list[Invoice]:
        """List invoices ordered by due date."""
        pass

    @abstractmethod
    def get_invoice(self, org_id: int, invoice_id: str) -> Optional[Invoice]:
        """Get invoice by ID."""
        pass

    @abstractmethod
    def save_invoices(self, org_id: int, invoices: Sequence[Invoice]) -> None:
        """Insert or update invoices in a single commit."""
        pass

    @abstractmethod
    def delete_invoice(self, org_id: int, invoice_id: str) -> None:
        """Delete an invoice."""
        pass

    # Bill operations
    @abstractmethod
    def list_bills(self, org_id: int) -> list[Bill]:
        """List bills ordered by due date."""
        pass

    @abstractmethod
    def get_bill(self, org_id: int, bill_id: str) -> Optional[Bill]:
        """Get bill by ID."""
        pass

    @abstractmethod
    def save_bills(self, org_id: int, bills: Sequence[Bill]) -> None:
        """Insert or update bills in a single commit."""
        pass

    @abstractmethod
    def delete_bill(self, org_id: int, bill_id: str) -> None:
        """Delete a bill."""
        pass

    # Recurring template operations
    @abstractmethod
    def list_templates(self, org_id: int, active_only: bool = False) -> list[RecurringTemplate]:
        """List recurring templates, optionally only active ones."""
        pass

    @abstractmethod
    def get_template(self, org_id: int, template_id: str) -> Optional[RecurringTemplate]:
        """Get recurring template by ID."""
        pass

    @abstractmethod
    def save_template(self, org_id: int, template: RecurringTemplate) -> None:
        """Insert or update a recurring template."""
        pass

    @abstractmethod
    def delete_template(self, org_id: int, template_id: str) -> None:
        """Delete a recurring template. Generated entries are kept."""
        pass

    # Cash operations
    @abstractmethod
    def record_cash_snapshot(
        self, org_id: int, balance: Decimal, recorded_at: datetime
    ) -> CashSnapshot:
        """Record a cash balance."""
        pass

    @abstractmethod
    def latest_cash_snapshot(self, org_id: int) -> Optional[CashSnapshot]:
        """Get the most recently recorded cash balance."""
        pass

"""Recurring template domain service."""

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional

from cashflow.database.base import Database
from cashflow.domain.entities import Frequency, RecurringTemplate, TemplateType
from cashflow.domain.errors import (
    ConflictError,
    NotFoundError,
    duplicate_entry_id,
    template_not_found,
)
from cashflow.domain.ledger import generate_entry_id
from cashflow.domain.validation import validate_template

logger = logging.getLogger(__name__)


class TemplateService:
    """Service for managing recurring templates.

    Templates are only weakly linked to the entries they generate: changing
    or removing a template leaves existing invoices and bills untouched.
    """

    def __init__(self, db: Database):
        """Initialize template service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_template(
        self,
        org_id: int,
        type: TemplateType,
        name: str,
        amount: Decimal,
        frequency: Frequency,
        start_date: date,
        template_id: Optional[str] = None,
    ) -> RecurringTemplate:
        """Create an active recurring template.

        Raises:
            ValidationError: If name or amount is invalid
            ConflictError: If the ID is already used
        """
        template = validate_template(
            RecurringTemplate(
                id=template_id or generate_entry_id("TPL"),
                type=type,
                name=name.strip() if name else name,
                amount=amount,
                frequency=frequency,
                start_date=start_date,
                active=True,
            )
        )
        if self.db.get_template(org_id, template.id) is not None:
            raise ConflictError(duplicate_entry_id("Template", template.id))

        self.db.save_template(org_id, template)
        logger.info(
            "Created %s %s template %s",
            template.frequency.value,
            template.type.value,
            template.id,
        )
        return template

    def get_template(self, org_id: int, template_id: str) -> Optional[RecurringTemplate]:
        """Get template by ID."""
        return self.db.get_template(org_id, template_id)

    def require_template(self, org_id: int, template_id: str) -> RecurringTemplate:
        """Get template by ID or raise NotFoundError."""
        template = self.db.get_template(org_id, template_id)
        if template is None:
            raise NotFoundError(template_not_found(template_id))
        return template

    def list_templates(self, org_id: int, active_only: bool = False) -> list[RecurringTemplate]:
        """List templates."""
        return self.db.list_templates(org_id, active_only=active_only)

    def deactivate_template(self, org_id: int, template_id: str) -> RecurringTemplate:
        """Stop a template from generating further entries."""
        template = self.require_template(org_id, template_id)
        if not template.active:
            return template
        template = replace(template, active=False)
        self.db.save_template(org_id, template)
        logger.info("Deactivated template %s", template_id)
        return template

    def delete_template(self, org_id: int, template_id: str) -> None:
        """Delete a template. Entries it generated are kept."""
        self.require_template(org_id, template_id)
        self.db.delete_template(org_id, template_id)
        logger.info("Deleted template %s", template_id)

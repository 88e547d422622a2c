"""Materialization of recurring invoice and bill templates.

Each template occurrence gets the id ``<template id>-<occurrence index>``,
so whether an occurrence was already generated is a plain set-membership
check against the existing ledger ids. Running the scheduler again with the
grown ledger never produces a duplicate.
"""

import logging
from datetime import date, timedelta
from typing import Iterable, Optional

from cashflow.domain.entities import (
    Bill,
    BillPriority,
    BillStatus,
    Invoice,
    InvoiceStatus,
    MaterializedEntries,
    Occurrence,
    RecurringTemplate,
    TemplateType,
)

logger = logging.getLogger(__name__)

DEFAULT_LOOKAHEAD_DAYS = 7


def occurrence_id(template_id: str, index: int) -> str:
    """Deterministic id of the ``index``-th occurrence of a template."""
    return f"{template_id}-{index}"


def next_occurrence(template: RecurringTemplate, today: date) -> Optional[Occurrence]:
    """Compute the next occurrence of a template after ``today``.

    Args:
        template: Recurring template
        today: Reference date

    Returns:
        The upcoming occurrence, or None if the template has not started yet
    """
    if template.start_date > today:
        return None

    interval_days = template.frequency.interval_days
    days_since_start = (today - template.start_date).days
    index = days_since_start // interval_days + 1
    due_date = template.start_date + timedelta(days=index * interval_days)
    return Occurrence(
        template_id=template.id,
        index=index,
        entry_id=occurrence_id(template.id, index),
        due_date=due_date,
    )


def materialize_recurring(
    templates: Iterable[RecurringTemplate],
    invoices: Iterable[Invoice],
    bills: Iterable[Bill],
    today: date,
    lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS,
) -> MaterializedEntries:
    """Generate the entries for template occurrences due within the lookahead.

    Args:
        templates: Recurring templates; inactive ones are skipped
        invoices: Existing invoices
        bills: Existing bills
        today: Reference date
        lookahead_days: Occurrences due on or before ``today + lookahead_days``
            are generated

    Returns:
        MaterializedEntries with the new invoices and bills. Existing records
        are never modified.
    """
    existing_ids = {inv.id for inv in invoices} | {bill.id for bill in bills}
    horizon = today + timedelta(days=lookahead_days)

    new_invoices: list[Invoice] = []
    new_bills: list[Bill] = []

    for template in templates:
        if not template.active:
            continue

        occurrence = next_occurrence(template, today)
        if occurrence is None:
            continue
        if occurrence.entry_id in existing_ids or occurrence.due_date > horizon:
            continue

        if template.type is TemplateType.INVOICE:
            new_invoices.append(
                Invoice(
                    id=occurrence.entry_id,
                    client=template.name,
                    amount=template.amount,
                    date_sent=today,
                    due_date=occurrence.due_date,
                    status=InvoiceStatus.SENT,
                    template_id=template.id,
                )
            )
        else:
            new_bills.append(
                Bill(
                    id=occurrence.entry_id,
                    vendor=template.name,
                    amount=template.amount,
                    due_date=occurrence.due_date,
                    status=BillStatus.UNPAID,
                    priority=BillPriority.HIGH,
                    template_id=template.id,
                )
            )
        existing_ids.add(occurrence.entry_id)
        logger.debug(
            "Template %s occurrence %d due %s",
            template.id,
            occurrence.index,
            occurrence.due_date,
        )

    return MaterializedEntries(new_invoices=tuple(new_invoices), new_bills=tuple(new_bills))

"""JSON backup of an organization's ledger."""

import json
from dataclasses import asdict
from datetime import date
from enum import Enum
from typing import Any

from cashflow.domain.entities import Ledger


def backup_filename(today: date) -> str:
    """Default file name for a backup taken on ``today``."""
    return f"cashflow_backup_{today.isoformat()}.json"


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


def ledger_to_dict(ledger: Ledger, exported_on: date) -> dict[str, Any]:
    """Convert a ledger to plain dicts and lists.

    Amounts and dates stay Decimal and date objects. ``dump_ledger``
    writes them as strings so no precision is lost.
    """
    return {
        "exported_on": exported_on,
        "cash_balance": ledger.cash_balance,
        "invoices": [_plain(asdict(invoice)) for invoice in ledger.invoices],
        "bills": [_plain(asdict(bill)) for bill in ledger.bills],
        "templates": [_plain(asdict(template)) for template in ledger.templates],
    }


def dump_ledger(ledger: Ledger, exported_on: date) -> str:
    """Serialize a ledger as JSON indented by two spaces."""
    return json.dumps(ledger_to_dict(ledger, exported_on), indent=2, default=str)

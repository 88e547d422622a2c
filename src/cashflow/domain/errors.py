"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input rejected at the ingestion boundary."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class InvalidTransitionError(ConflictError):
    """Status change not permitted by the transition rules."""


class DataError(DomainError):
    """Record that breaks a ledger invariant despite passing ingestion.

    Raised while aggregating; callers exclude the record and report the
    message as a warning instead of aborting the computation.
    """


def invoice_not_found(invoice_id: str) -> str:
    """Return message for missing invoice."""
    return f"Invoice '{invoice_id}' not found"


def bill_not_found(bill_id: str) -> str:
    """Return message for missing bill."""
    return f"Bill '{bill_id}' not found"


def template_not_found(template_id: str) -> str:
    """Return message for missing recurring template."""
    return f"Template '{template_id}' not found"


def duplicate_entry_id(kind: str, entry_id: str) -> str:
    """Return message for an id that is already taken."""
    return f"{kind} with id '{entry_id}' already exists"


def invalid_transition(kind: str, entry_id: str, current: str, target: str) -> str:
    """Return message for a status change that is not allowed."""
    return f"Cannot change {kind} '{entry_id}' from {current} to {target}"

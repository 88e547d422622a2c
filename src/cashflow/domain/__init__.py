"""Domain layer for cashflow application."""

__all__ = [
    "LedgerService",
    "TemplateService",
    "DashboardService",
]


# Services are imported lazily: they depend on cashflow.database.base, which
# itself imports cashflow.domain.entities.
def __getattr__(name):
    if name == "LedgerService":
        from cashflow.domain.ledger import LedgerService
        return LedgerService
    if name == "TemplateService":
        from cashflow.domain.template import TemplateService
        return TemplateService
    if name == "DashboardService":
        from cashflow.domain.dashboard import DashboardService
        return DashboardService
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

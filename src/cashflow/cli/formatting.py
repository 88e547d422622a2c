"""CLI output formatting helpers."""

from decimal import Decimal


def format_currency(amount: Decimal) -> str:
    """Format an amount as dollars, e.g. ``$1,234.50`` or ``-$20.00``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_signed(amount: Decimal) -> str:
    """Format a change with an explicit sign, e.g. ``+$10.00``."""
    return f"+{format_currency(amount)}" if amount >= 0 else format_currency(amount)

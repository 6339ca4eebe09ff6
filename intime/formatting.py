"""Display formatting for intime.

Pure functions for Brazilian currency and date formatting.
"""

from datetime import datetime
from decimal import Decimal

from intime.domain.models import Money, to_reais


def format_currency(value: Decimal | float | int) -> str:
    """Format an amount in reais the Brazilian way.

    Args:
        value: Amount in reais.

    Returns:
        Formatted string (e.g., "R$ 1.234,56").
    """
    formatted = f"{abs(Decimal(str(value))):,.2f}"
    formatted = formatted.replace(",", "_").replace(".", ",").replace("_", ".")
    sign = "-" if value < 0 else ""
    return f"{sign}R$ {formatted}"


def format_money(amount: Money) -> str:
    """Format an amount in centavos (e.g., 4590 -> "R$ 45,90")."""
    return format_currency(to_reais(amount))


def format_date(dt: datetime) -> str:
    """Format a timestamp as dd/mm/yyyy hh:mm."""
    return dt.strftime("%d/%m/%Y %H:%M")


def format_relative_date(dt: datetime, now: datetime) -> str:
    """Format a timestamp relative to now.

    Args:
        dt: Timestamp to format.
        now: Current time.

    Returns:
        "Agora mesmo", "Hoje, HH:MM", "Ontem, HH:MM", "N dias atrás" or dd/mm/yyyy.
    """
    diff_hours = (now - dt).total_seconds() / 3600

    if diff_hours < 1:
        return "Agora mesmo"
    if diff_hours < 24:
        return f"Hoje, {dt:%H:%M}"
    if diff_hours < 48:
        return f"Ontem, {dt:%H:%M}"
    if diff_hours < 168:
        return f"{int(diff_hours // 24)} dias atrás"
    return dt.strftime("%d/%m/%Y")

"""Domain type definitions for intime.

These NewTypes provide semantic clarity and help with type checking:
- Money: Amount in centavos (minor units of BRL)
- Description: Purchase description text
- PurchaseType: How a purchase was recorded ("ocr" or "manual")
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Literal, NewType

# Money amounts are stored as centavos (minor units) to avoid floating point errors
Money = NewType("Money", int)

# Purchase description text
Description = NewType("Description", str)

PurchaseType = Literal["ocr", "manual"]

PURCHASE_TYPES: tuple[PurchaseType, ...] = ("ocr", "manual")


def to_money(amount: Decimal | float | int) -> Money:
    """Convert an amount in reais to centavos.

    Args:
        amount: Amount in reais.

    Returns:
        Amount in centavos, rounded half-up to the nearest centavo.
    """
    centavos = (Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return Money(int(centavos))


def to_reais(amount: Money) -> Decimal:
    """Convert centavos to a Decimal amount in reais."""
    return (Decimal(amount) / 100).quantize(Decimal("0.01"))

"""Pure functions for purchase history: drafting, filtering, sorting, summaries.

This module contains the functional core for purchase operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are in centavos (Money type).
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from intime.domain.models import PURCHASE_TYPES, Description, Money, PurchaseType, to_money
from intime.domain.worktime import UserRateProfile, convert_for_profile

DEFAULT_DESCRIPTIONS: dict[str, str] = {
    "ocr": "Cupom Fiscal",
    "manual": "Cálculo Manual",
}

SORT_KEYS = ("date", "value", "time")


@dataclass(frozen=True)
class PurchaseDraft:
    """Immutable purchase data ready for insertion."""

    user_id: int
    value: Money
    time_hours: int
    time_minutes: int
    type: PurchaseType
    description: Description | None = None
    image_path: str | None = None


@dataclass(frozen=True)
class Purchase:
    """Immutable stored purchase."""

    id: int
    user_id: int
    value: Money
    time_hours: int
    time_minutes: int
    type: PurchaseType
    description: Description | None = None
    image_path: str | None = None
    created_at: datetime | None = None

    @property
    def work_minutes(self) -> int:
        return self.time_hours * 60 + self.time_minutes


@dataclass(frozen=True)
class PurchaseSummary:
    """Immutable totals over a set of purchases."""

    count: int
    total_spent: Money
    total_minutes: int
    hours: int
    minutes: int


def build_purchase_draft(
    user_id: int,
    value: Decimal | float,
    profile: UserRateProfile,
    purchase_type: PurchaseType,
    description: str | None = None,
    image_path: str | None = None,
) -> PurchaseDraft:
    """Create a purchase record with its work time computed.

    Args:
        user_id: Owner's user ID.
        value: Purchase value in reais.
        profile: Owner's salary profile.
        purchase_type: "ocr" or "manual".
        description: Optional description. Blank strings are stored as None.
        image_path: Receipt image path for OCR purchases.

    Returns:
        PurchaseDraft ready for the store.

    Raises:
        ValueError: If the value is not positive or the type is unknown.
    """
    if value <= 0:
        raise ValueError("Purchase value must be greater than zero")
    if purchase_type not in PURCHASE_TYPES:
        raise ValueError(f"Unknown purchase type: {purchase_type}")

    duration = convert_for_profile(value, profile)
    cleaned = description.strip() if description else ""

    return PurchaseDraft(
        user_id=user_id,
        value=to_money(value),
        time_hours=duration.hours,
        time_minutes=duration.minutes,
        type=purchase_type,
        description=Description(cleaned) if cleaned else None,
        image_path=image_path,
    )


def display_description(purchase: Purchase) -> str:
    """Get the description shown for a purchase, with a per-type default."""
    return purchase.description or DEFAULT_DESCRIPTIONS[purchase.type]


def filter_purchases(purchases: list[Purchase], search: str | None) -> list[Purchase]:
    """Filter purchases by case-insensitive description search.

    Args:
        purchases: Purchases to filter.
        search: Search term. Empty or None keeps every purchase.

    Returns:
        Matching purchases, order preserved.
    """
    if not search:
        return list(purchases)

    term = search.lower()
    return [p for p in purchases if p.description and term in p.description.lower()]


def sort_purchases(purchases: list[Purchase], sort_by: str = "date") -> list[Purchase]:
    """Sort purchases, largest first.

    Args:
        purchases: Purchases to sort.
        sort_by: "date" (newest first), "value" or "time".

    Returns:
        New sorted list.

    Raises:
        ValueError: If sort_by is not a known key.
    """
    if sort_by == "value":
        return sorted(purchases, key=lambda p: p.value, reverse=True)
    if sort_by == "time":
        return sorted(purchases, key=lambda p: p.work_minutes, reverse=True)
    if sort_by == "date":
        return sorted(purchases, key=lambda p: p.created_at or datetime.min, reverse=True)

    raise ValueError(f"Unknown sort key: {sort_by}")


def summarize_purchases(purchases: list[Purchase]) -> PurchaseSummary:
    """Total up spending and work time.

    Args:
        purchases: Purchases to summarize.

    Returns:
        PurchaseSummary with the total work time split into hours and minutes.
    """
    total_spent = sum(p.value for p in purchases)
    total_minutes = sum(p.work_minutes for p in purchases)

    return PurchaseSummary(
        count=len(purchases),
        total_spent=Money(total_spent),
        total_minutes=total_minutes,
        hours=total_minutes // 60,
        minutes=total_minutes % 60,
    )


def recent_purchases(purchases: list[Purchase], limit: int = 3) -> list[Purchase]:
    """Get the most recent purchases."""
    return sort_purchases(purchases, "date")[:limit]

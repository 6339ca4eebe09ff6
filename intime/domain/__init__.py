"""Domain models and types for intime.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from intime.domain.models import Description, Money, PurchaseType
from intime.domain.receipt import ExtractionResult, build_result, extract_total
from intime.domain.worktime import UserRateProfile, WorkTimeDuration, convert, format_duration

__all__ = [
    "Money",
    "Description",
    "PurchaseType",
    "ExtractionResult",
    "build_result",
    "extract_total",
    "UserRateProfile",
    "WorkTimeDuration",
    "convert",
    "format_duration",
]

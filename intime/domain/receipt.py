"""Pure functions for finding the total on OCR'd receipt text.

This module contains the functional core for receipt parsing:
- No I/O operations (no network, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Amounts are returned as Decimal reais. Brazilian receipts use a decimal comma,
so "45,90" and "45.90" both parse to 45.90.
"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

ZERO = Decimal("0")

# Optional "R$" / "$" marker (the R alone is also optional), then the amount
_AMOUNT = r"[:\s]*r?\$?\s*(\d+[,.]?\d*)"


@dataclass(frozen=True)
class LabeledPattern:
    """A keyword rule that captures the amount printed next to it."""

    name: str
    regex: re.Pattern[str]


@dataclass(frozen=True)
class ExtractionResult:
    """Immutable result of scanning receipt text for a total."""

    raw_text: str
    total_value: Decimal
    success: bool


# Checked in this order; the first rule yielding a positive amount wins,
# regardless of where in the text other rules would match.
LABELED_PATTERNS: tuple[LabeledPattern, ...] = (
    LabeledPattern("total", re.compile(r"\btotal(?:\s+geral)?" + _AMOUNT, re.IGNORECASE)),
    LabeledPattern("valor total", re.compile(r"valor\s*total" + _AMOUNT, re.IGNORECASE)),
    LabeledPattern("subtotal", re.compile(r"subtotal" + _AMOUNT, re.IGNORECASE)),
    LabeledPattern("total geral", re.compile(r"total\s*geral" + _AMOUNT, re.IGNORECASE)),
    LabeledPattern("trailing total", re.compile(r"r?\$\s*(\d+[,.]?\d*)\s*total", re.IGNORECASE)),
)

CURRENCY_PATTERN = re.compile(r"r?\$\s*(\d+[,.]?\d*)", re.IGNORECASE)


def parse_amount(token: str) -> Decimal | None:
    """Parse a captured amount token.

    Args:
        token: Numeric token, possibly with a decimal comma (e.g. "45,90").

    Returns:
        Positive Decimal amount, or None if the token is not a positive number.
    """
    try:
        value = Decimal(token.strip().replace(",", ".", 1))
    except InvalidOperation:
        return None

    if not value.is_finite() or value <= 0:
        return None
    return value


def match_labeled_total(text: str) -> tuple[str, Decimal] | None:
    """Find the total using the labeled keyword rules.

    Args:
        text: Receipt text.

    Returns:
        Tuple of (rule_name, amount) for the first rule that yields a positive
        amount, or None if no rule does.
    """
    for pattern in LABELED_PATTERNS:
        match = pattern.regex.search(text)
        if not match:
            continue

        value = parse_amount(match.group(1))
        if value is not None:
            return pattern.name, value

    return None


def find_currency_values(text: str) -> list[Decimal]:
    """Find every positive currency-marked amount in the text, in order."""
    values = []
    for match in CURRENCY_PATTERN.finditer(text):
        value = parse_amount(match.group(1))
        if value is not None:
            values.append(value)
    return values


def extract_total(text: str) -> Decimal:
    """Find the most likely purchase total in receipt text.

    Labeled rules are tried first. If none matches, the largest
    currency-marked amount in the text is taken as the total, which can pick
    a large line item on receipts without a printed total.

    Args:
        text: Raw OCR text.

    Returns:
        Total amount in reais, or Decimal("0") if nothing plausible is found.
    """
    if not text or not text.strip():
        return ZERO

    labeled = match_labeled_total(text)
    if labeled is not None:
        return labeled[1]

    values = find_currency_values(text)
    if values:
        return max(values)

    return ZERO


def build_result(raw_text: str) -> ExtractionResult:
    """Wrap extract_total in an ExtractionResult.

    Args:
        raw_text: Raw OCR text.

    Returns:
        ExtractionResult with success True iff a positive total was found.
    """
    total_value = extract_total(raw_text)
    return ExtractionResult(raw_text=raw_text, total_value=total_value, success=total_value > 0)

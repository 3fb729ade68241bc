"""
USD amount parser for invoice and contract text.

Handles the conventions seen on creator invoices:
- $1,963.00 / $ 900
- 900 USD / 1,250.50 usd
- bare 2,500.00 as a last resort
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Iterator, Optional


# Ordered by priority; first candidate that converts wins
AMOUNT_PATTERNS = [
    re.compile(r"\$\s*(\d[\d,]*(?:\.\d{2})?)"),
    re.compile(r"(?<![\d,])(\d[\d,]*(?:\.\d{2})?)\s*USD", re.IGNORECASE),
    re.compile(r"(\d[\d,]*(?:\.\d{2})?)"),
]

# Used when re-deriving an implausible amount
CANDIDATE_PATTERNS = [
    re.compile(r"\$\s*([\d,.]+)"),
    re.compile(r"(?<!\d)(\d{3,}\.\d{2})"),
]


def parse_money(raw: Optional[str]) -> Optional[Decimal]:
    """
    Convert one captured numeric token ("2,500.00", "900", "1,963.") to Decimal.
    Returns None when the token is not a number.
    """
    if not raw:
        return None
    s = raw.replace(",", "").strip().rstrip(".")
    if not s:
        return None
    try:
        amount = Decimal(s)
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite() or amount < 0:
        return None
    return amount


def extract_amount(text: Optional[str]) -> Optional[Decimal]:
    """Extract the most likely monetary value from a text span."""
    if not text:
        return None

    for pattern in AMOUNT_PATTERNS:
        for m in pattern.finditer(text):
            amount = parse_money(m.group(1))
            if amount is not None:
                return amount
    return None


def find_amount_candidates(text: str) -> Iterator[Decimal]:
    """Every $-amount and every bare 3+ digit number with cents, in pattern order."""
    for pattern in CANDIDATE_PATTERNS:
        for m in pattern.finditer(text):
            amount = parse_money(m.group(1))
            if amount is not None:
                yield amount

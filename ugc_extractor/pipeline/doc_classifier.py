"""
Document classification - UGC contract / creator invoice detection.

Each predicate needs one term from each of two independent vocabularies.
Presence drives the result, not counts: scanning stops at the first hit.
"""

from typing import Optional

from pydantic import BaseModel


class ClassificationResult(BaseModel):
    is_ugc_contract: bool = False
    is_creator_invoice: bool = False
    signals: list[str] = []


UGC_TERMS = (
    "ugc",
    "user-generated content",
    "content creator",
    "creator agreement",
    "talent agreement",
    "influencer",
    "social media content",
)

CONTRACT_TERMS = (
    "agreement",
    "contract",
    "terms and conditions",
    "services provided",
    "term of agreement",
    "obligations",
)

INVOICE_TERMS = (
    "invoice",
    "bill to",
    "payment due",
    "total",
    "subtotal",
    "amount due",
    "pay to",
    "service",
)

CREATOR_TERMS = (
    "ugc",
    "content",
    "creator",
    "video",
    "photo",
    "social media",
    "post",
    "usage rights",
    "footage",
)


def _first_term(lowered: str, terms: tuple[str, ...]) -> Optional[str]:
    for term in terms:
        if term in lowered:
            return term
    return None


def is_ugc_contract(text: str) -> bool:
    """True when the text reads like a UGC creator contract."""
    lowered = text.lower()
    return (
        _first_term(lowered, UGC_TERMS) is not None
        and _first_term(lowered, CONTRACT_TERMS) is not None
    )


def is_creator_invoice(text: str) -> bool:
    """True when the text reads like an invoice for creator services."""
    lowered = text.lower()
    return (
        _first_term(lowered, INVOICE_TERMS) is not None
        and _first_term(lowered, CREATOR_TERMS) is not None
    )


def classify_document(text: str) -> ClassificationResult:
    """Run both predicates and report the first term hit in each vocabulary."""
    lowered = text.lower()
    hits = {
        "UGC": _first_term(lowered, UGC_TERMS),
        "CONTRACT": _first_term(lowered, CONTRACT_TERMS),
        "INVOICE": _first_term(lowered, INVOICE_TERMS),
        "CREATOR": _first_term(lowered, CREATOR_TERMS),
    }
    signals = [f"{category}:{term}" for category, term in hits.items() if term]

    return ClassificationResult(
        is_ugc_contract=bool(hits["UGC"] and hits["CONTRACT"]),
        is_creator_invoice=bool(hits["INVOICE"] and hits["CREATOR"]),
        signals=signals,
    )

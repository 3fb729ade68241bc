"""
Cross-field cleanup applied to every extracted record.

Steps, in order:
1. Client name: strip trailing corporate suffixes, cap runaway matches
2. Amount: last-resort full-text scan when still unknown
3. Amount plausibility: rescan candidates when outside the plausible window
4. Known-template literal defaults, for any document type
5. Amount rounded to cents
6. Contracts default to one deliverable

The plausibility rescan is a simple robustness heuristic, not an estimator:
it picks the (upper) median of in-range candidates and can still be wrong.
Running finalize twice yields the same record.
"""

import re
import statistics
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

import structlog

from ugc_extractor.config import settings
from ugc_extractor.models.enums import DocumentType
from ugc_extractor.observability.metrics import amount_corrections_total
from ugc_extractor.pipeline.amount_parser import extract_amount, find_amount_candidates
from ugc_extractor.pipeline.templates import apply_template_defaults, templates_with_defaults
from ugc_extractor.schemas.extracted import ExtractedData

logger = structlog.get_logger(__name__)

CORPORATE_SUFFIX = re.compile(
    r"(?:[\s,]*\b(?:ltd|llc|inc|limited|corp|corporation)\.?)+[\s,]*$",
    re.IGNORECASE,
)

CENTS = Decimal("0.01")


def strip_corporate_suffix(name: str) -> str:
    return CORPORATE_SUFFIX.sub("", name).rstrip()


def clean_client_name(name: Optional[str]) -> Optional[str]:
    """Drop trailing entity suffixes; shorten overly long names to their first words."""
    if name is None:
        return None
    cleaned = strip_corporate_suffix(name)
    if len(cleaned) > settings.CLIENT_NAME_MAX_CHARS:
        words = cleaned.split()
        if len(words) > settings.CLIENT_NAME_MAX_WORDS:
            cleaned = strip_corporate_suffix(" ".join(words[:settings.CLIENT_NAME_MAX_WORDS]))
    return cleaned or None


def is_plausible_amount(amount: Decimal) -> bool:
    return settings.AMOUNT_PLAUSIBLE_MIN <= amount <= settings.AMOUNT_PLAUSIBLE_MAX


def rescan_amount(raw_text: str) -> Optional[Decimal]:
    """Upper median of in-range $-amounts and bare cents amounts, or None."""
    candidates = sorted(
        amount
        for amount in find_amount_candidates(raw_text)
        if settings.AMOUNT_CANDIDATE_MIN <= amount <= settings.AMOUNT_CANDIDATE_MAX
    )
    if not candidates:
        return None
    return statistics.median_high(candidates)


def round_to_cents(amount: Decimal) -> Optional[Decimal]:
    """Amount rounded half-up to cents; None when it has too many digits to round."""
    try:
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        logger.warning("amount_dropped", digits=len(amount.as_tuple().digits))
        return None


def finalize(data: ExtractedData, document_type: DocumentType, raw_text: str) -> ExtractedData:
    """Apply cross-field cleanup in place and return the same record."""
    data.client_name = clean_client_name(data.client_name)

    if data.amount is None:
        data.amount = extract_amount(raw_text)

    if data.amount is not None and not is_plausible_amount(data.amount):
        replacement = rescan_amount(raw_text)
        if replacement is not None:
            logger.info(
                "amount_rescanned",
                original=str(data.amount),
                selected=str(replacement),
            )
            amount_corrections_total.labels(result="replaced").inc()
            data.amount = replacement
        else:
            amount_corrections_total.labels(result="kept").inc()

    for template in templates_with_defaults(raw_text):
        apply_template_defaults(template, data, raw_text)
    # Defaults carry full legal names; keep finalize idempotent
    data.client_name = clean_client_name(data.client_name)

    if data.amount is not None:
        data.amount = round_to_cents(data.amount)

    if document_type == DocumentType.CONTRACT and data.video_count is None:
        data.video_count = 1

    return data

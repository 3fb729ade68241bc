"""
Invoice field extraction.

Two rule tracks: creator (UGC) invoices and generic invoices, picked by
classify_document. Known templates then override what they recognise, and
a few whole-document fallbacks fill whatever is still empty.
"""

import re
from typing import Optional

import structlog

from ugc_extractor.models.enums import DocumentType
from ugc_extractor.pipeline.amount_parser import extract_amount, parse_money
from ugc_extractor.pipeline.date_parser import parse_date
from ugc_extractor.pipeline.deliverable_counter import count_deliverables
from ugc_extractor.pipeline.doc_classifier import classify_document
from ugc_extractor.pipeline.rules import (
    DATE_TEXT,
    EOL,
    GAP,
    NAME,
    NUMBER,
    OPT_GAP,
    SEP,
    first_match,
    rule,
)
from ugc_extractor.pipeline.templates import apply_template_overrides, fingerprint
from ugc_extractor.schemas.extracted import ExtractedInvoiceData

logger = structlog.get_logger(__name__)


# ── Creator (UGC) invoices ───────────────────────────────────
UGC_CLIENT_RULES = (
    rule(r"bill to[ \t]*(?:\n|:)\s*" + NAME + EOL),
    rule(r"invoice to[ \t]*(?:\n|:)\s*" + NAME + EOL),
    rule(r"client[ \t]*(?:\n|:)\s*" + NAME + EOL),
)

UGC_AMOUNT_RULES = (
    rule(r"\btotal(?:\s*\(USD\))?" + SEP + r"\$?" + NUMBER),
    rule(r"\$\s*" + NUMBER),
    rule(r"amount due" + SEP + r"\$?" + NUMBER),
    rule(r"USD\s*" + NUMBER),
)

UGC_DUE_DATE_RULES = (
    rule(r"(?:due date|payment due|due by|pay by)" + SEP + DATE_TEXT + EOL),
    rule(r"due" + SEP + DATE_TEXT + EOL),
    rule(r"next payment due" + SEP + DATE_TEXT + EOL),
)

UGC_CREATOR_RULES = (
    rule(r"(?:talent|creator|influencer|artist)\s*(?::|=|-|x)\s*" + NAME + r"(?:" + GAP + r"(?:x|UGC)|\n|$)"),
    rule(r"([A-Za-z][A-Za-z\s]{0,79}?)" + GAP + r"x" + GAP + r"(?:UGC|content|video)"),
    rule(r"\b(?:from|by)\s+([A-Za-z][A-Za-z\s]{0,79}?)(?:" + GAP + r"(?:for|to)|\n|$)"),
)

# ── Generic invoices ─────────────────────────────────────────
GENERIC_CLIENT_RULES = (
    rule(r"\b(?:to|client|billed to|customer|bill to)" + SEP + NAME + EOL),
    rule(r"bill\s+to" + SEP + NAME + EOL),
    rule(r"customer" + SEP + NAME + EOL),
)

GENERIC_AMOUNT_RULES = (
    rule(r"(?:amount|total|sum|payment|grand total|total amount)" + SEP + r"\$?" + NUMBER),
    rule(r"total" + SEP + r"\$?" + NUMBER),
    rule(r"\$" + NUMBER + r"[^0-9A-Za-z]{0,20}(?:total|amount|due)"),
)

GENERIC_DUE_DATE_RULES = (
    rule(r"(?:due date|payment due|due by|pay by)" + SEP + DATE_TEXT + EOL),
    rule(r"(?:due|payment due)" + SEP + DATE_TEXT + EOL),
)

GENERIC_CREATOR_RULES = (
    rule(r"\b(?:from|vendor|issued by|creator)" + SEP + NAME + EOL),
    rule(r"invoice\s+from" + SEP + NAME + EOL),
    rule(
        r"^([A-Za-z0-9&.,'-][A-Za-z0-9 &.,'-]{0,79}?)" + OPT_GAP + r"\n(?:invoice|bill)",
        flags=re.IGNORECASE | re.MULTILINE,
    ),
)

# ── Whole-document fallbacks ─────────────────────────────────
TITLE_CLIENT_RULES = (
    rule(r"^[ \t]*([A-Za-z&][A-Za-z &]{0,59}?)[ \t]{1,10}Invoice\b", flags=re.IGNORECASE | re.MULTILINE),
    rule(r"Invoice\s+from\s+([A-Za-z &]{1,60})"),
)

DATE_SCAN_RULES = (
    rule(r"(?:date|issued|created)\s*(?::|on)\s*" + DATE_TEXT + EOL),
    rule(r"([A-Za-z]{3,9}\.?" + GAP + r"\d{1,2},?" + GAP + r"\d{4})"),
    rule(r"(\d{1,2}[/.-]\d{1,2}[/.-]\d{2,4})"),
)

_EMAIL = re.compile(r"([A-Za-z0-9._-]{1,64})@[A-Za-z0-9_-]+(?:\.[A-Za-z0-9_-]+)+")


def name_from_email(text: str) -> Optional[str]:
    """Display name from the first email's local part ("john.doe@x.com" -> "John Doe")."""
    m = _EMAIL.search(text)
    if not m:
        return None
    tokens = [t for t in re.split(r"[._-]+", m.group(1)) if t]
    if not tokens:
        return None
    return " ".join(t[:1].upper() + t[1:] for t in tokens)


def _latest_date(text: str):
    """Latest parseable date anywhere in the text; invoices list issue date before due date."""
    found = []
    for r in DATE_SCAN_RULES:
        for m in r.pattern.finditer(text):
            parsed = parse_date(m.group(r.group))
            if parsed is not None:
                found.append(parsed)
    return max(found) if found else None


def _extract_creator_invoice(text: str, data: ExtractedInvoiceData) -> None:
    data.client_name = first_match(UGC_CLIENT_RULES, text) or name_from_email(text)
    data.amount = first_match(UGC_AMOUNT_RULES, text, convert=parse_money)
    data.due_date = first_match(UGC_DUE_DATE_RULES, text, convert=parse_date)
    data.video_count = count_deliverables(text)
    data.creator_name = first_match(UGC_CREATOR_RULES, text)


def _extract_generic_invoice(text: str, data: ExtractedInvoiceData) -> None:
    data.client_name = first_match(GENERIC_CLIENT_RULES, text)
    data.amount = first_match(GENERIC_AMOUNT_RULES, text, convert=parse_money)
    data.due_date = first_match(GENERIC_DUE_DATE_RULES, text, convert=parse_date)
    data.video_count = count_deliverables(text)
    data.creator_name = first_match(GENERIC_CREATOR_RULES, text)


def extract_invoice_data(text: str) -> ExtractedInvoiceData:
    """Best-effort invoice fields. Missing fields stay None."""
    data = ExtractedInvoiceData()
    classification = classify_document(text)
    creator_invoice = classification.is_creator_invoice

    if creator_invoice:
        _extract_creator_invoice(text, data)
    else:
        _extract_generic_invoice(text, data)

    template = fingerprint(text, DocumentType.INVOICE)
    if template is not None:
        apply_template_overrides(template, data, text)

    if data.client_name is None:
        data.client_name = first_match(TITLE_CLIENT_RULES, text)

    if data.amount is None:
        data.amount = extract_amount(text)

    if data.due_date is None:
        data.due_date = _latest_date(text)

    logger.debug(
        "invoice_fields_extracted",
        creator_invoice=creator_invoice,
        signals=classification.signals,
        template_id=template.template_id if template else None,
        fields=data.populated_fields(),
    )
    return data

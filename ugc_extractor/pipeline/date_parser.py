"""
US-first date parser for invoice and contract text.

Strategy (first valid calendar date wins):
1. Split numeric forms on / - . and try MM/DD/YYYY, DD/MM/YYYY, YYYY/MM/DD
2. Textual "Mon DD, YYYY"
3. Any embedded d/d/yy(yy) substring, MM/DD before DD/MM
4. dateutil as a general-purpose fallback

Source documents are predominantly US-formatted, so month-first wins
whenever both readings are valid.
"""

import re
from datetime import date
from typing import Optional

from dateutil import parser as dateutil_parser
from dateutil.relativedelta import relativedelta
from pydantic import BaseModel

from ugc_extractor.models.enums import DurationUnit


class DateParseResult(BaseModel):
    parsed_date: Optional[date] = None
    raw_text: str
    format_detected: str


MONTH_ABBREVIATIONS = (
    "jan", "feb", "mar", "apr", "may", "jun",
    "jul", "aug", "sep", "oct", "nov", "dec",
)

_DISALLOWED_CHARS = re.compile(r"[^\d/\-.,\s\w]")
_PART_SEPARATORS = re.compile(r"[/\-.]")
_LEADING_INT = re.compile(r"\s*(\d{1,9})(?!\d)")
_TEXTUAL_DATE = re.compile(
    r"\b([a-z]{3})[a-z]*\.?\s+(\d{1,2})(?:st|nd|rd|th)?[,\s]+(\d{4})",
    re.IGNORECASE,
)
_EMBEDDED_NUMERIC_DATE = re.compile(r"\b(\d{1,2}[/-]\d{1,2}[/-]\d{2,4})\b")
# Longer strings are not dates; dateutil gets slow and overflows on them
_DATEUTIL_MAX_CHARS = 64


def _leading_int(raw: str) -> Optional[int]:
    """Integer value of the leading digits (at most nine), ignoring leading whitespace."""
    m = _LEADING_INT.match(raw)
    return int(m.group(1)) if m else None


def _expand_year(year: Optional[int]) -> Optional[int]:
    if year is None:
        return None
    return 2000 + year if year < 100 else year


def _safe_date(year: Optional[int], month: Optional[int], day: Optional[int]) -> Optional[date]:
    """Build a date, or None when the parts do not form a real calendar day."""
    if year is None or month is None or day is None:
        return None
    try:
        return date(year, month, day)
    except (ValueError, OverflowError):
        return None


def _three_parts(s: str) -> Optional[list[Optional[int]]]:
    parts = _PART_SEPARATORS.split(s)
    if len(parts) != 3:
        return None
    return [_leading_int(p) for p in parts]


def _month_first(s: str) -> Optional[date]:
    parts = _three_parts(s)
    if parts is None:
        return None
    month, day, year = parts
    return _safe_date(_expand_year(year), month, day)


def _day_first(s: str) -> Optional[date]:
    parts = _three_parts(s)
    if parts is None:
        return None
    day, month, year = parts
    return _safe_date(_expand_year(year), month, day)


def _year_first(s: str) -> Optional[date]:
    parts = _three_parts(s)
    if parts is None:
        return None
    year, month, day = parts
    return _safe_date(year, month, day)


def _textual(s: str) -> Optional[date]:
    for m in _TEXTUAL_DATE.finditer(s):
        abbreviation = m.group(1).lower()
        if abbreviation not in MONTH_ABBREVIATIONS:
            continue
        month = MONTH_ABBREVIATIONS.index(abbreviation) + 1
        parsed = _safe_date(int(m.group(3)), month, int(m.group(2)))
        if parsed:
            return parsed
    return None


# Ordered: first layout producing a valid date wins
DATE_LAYOUTS = [
    (_month_first, "MM/DD/YYYY"),
    (_day_first, "DD/MM/YYYY"),
    (_year_first, "YYYY/MM/DD"),
    (_textual, "MON_DD_YYYY"),
]


def parse_date_detailed(raw: Optional[str]) -> DateParseResult:
    """
    Parse a loosely formatted date and report which layout matched.
    Never raises; unparseable input yields parsed_date=None.
    """
    if not raw or not raw.strip():
        return DateParseResult(parsed_date=None, raw_text=raw or "", format_detected="UNKNOWN")

    trimmed = raw.strip()
    cleaned = _DISALLOWED_CHARS.sub("", trimmed)

    for layout, format_name in DATE_LAYOUTS:
        parsed = layout(cleaned)
        if parsed is not None:
            return DateParseResult(parsed_date=parsed, raw_text=raw, format_detected=format_name)

    m = _EMBEDDED_NUMERIC_DATE.search(cleaned)
    if m:
        first, second, year_raw = re.split(r"[/-]", m.group(1))
        year = int(year_raw)
        if len(year_raw) == 2:
            year += 2000
        for parsed, format_name in (
            (_safe_date(year, int(first), int(second)), "EMBEDDED_MM/DD"),
            (_safe_date(year, int(second), int(first)), "EMBEDDED_DD/MM"),
        ):
            if parsed is not None:
                return DateParseResult(parsed_date=parsed, raw_text=raw, format_detected=format_name)

    if len(trimmed) <= _DATEUTIL_MAX_CHARS:
        try:
            parsed = dateutil_parser.parse(trimmed, dayfirst=False).date()
            return DateParseResult(parsed_date=parsed, raw_text=raw, format_detected="DATEUTIL")
        except (ValueError, OverflowError, TypeError):
            pass

    return DateParseResult(parsed_date=None, raw_text=raw, format_detected="UNKNOWN")


def parse_date(raw: Optional[str]) -> Optional[date]:
    """Parse a date substring; None when nothing validates."""
    return parse_date_detailed(raw).parsed_date


def add_duration(start: date, count: int, unit: DurationUnit) -> Optional[date]:
    """
    Shift a date by N days/months/years. Month ends clamp (Jan 31 + 1 month = Feb 28/29).
    None when the result falls outside the representable calendar.
    """
    if unit == DurationUnit.DAYS:
        delta = relativedelta(days=count)
    elif unit == DurationUnit.MONTHS:
        delta = relativedelta(months=count)
    else:
        delta = relativedelta(years=count)
    try:
        return start + delta
    except (OverflowError, ValueError):
        return None

"""
Ordered field rule tables.

A field is described by an immutable tuple of Rule(pattern, group) entries,
tried in order until one produces a usable value. Free-text captures use
bounded lazy quantifiers so each match attempt does bounded work.
"""

import re
from typing import Any, Callable, NamedTuple, Optional

from ugc_extractor.models.enums import DurationUnit


class Rule(NamedTuple):
    pattern: re.Pattern
    group: int = 1


# ── Capture fragments ────────────────────────────────────────
# Free-text captures never start on whitespace, so a preceding \s* can end
# in exactly one place. Whitespace after a capture is bounded (GAP).
# Name-ish span up to the end of the line
NAME = r"([A-Za-z0-9&.,'-][A-Za-z0-9\s&.,'-]{0,119}?)"
# Same, but never crosses a newline
LINE_NAME = r"([A-Za-z0-9&.,'-][A-Za-z0-9 \t&.,'-]{0,119}?)"
DATE_TEXT = r"([A-Za-z0-9,./-][A-Za-z0-9\s,./-]{0,59}?)"
NUMBER = r"([0-9,.]+)"
# Whole digit run of at most nine digits
COUNT = r"(?<!\d)(\d{1,9})"
GAP = r"\s{1,10}"
OPT_GAP = r"\s{0,10}"
SEP = r"\s*(?::|=|-)\s*"
COLON_OR_EQUALS = r"\s*(?::|=)\s*"
# Optional ":", "is" or "=" after a label
LABEL_SEP = r"\s*(?:(?::|is|=)\s*)?"
EOL = r"(?:\n|$)"
EOL_OR_DOT = r"(?:\n|$|\.)"
EOL_OR_PAREN = r"(?:\n|$|\()"
UNIT = r"(days?|months?|years?)"


def rule(regex: str, group: int = 1, flags: int = re.IGNORECASE) -> Rule:
    return Rule(re.compile(regex, flags), group)


def clean_text(raw: Optional[str]) -> Optional[str]:
    """Collapse whitespace and trim separators; empty becomes None."""
    if raw is None:
        return None
    cleaned = " ".join(raw.split()).strip(" ,;:")
    return cleaned or None


def first_match(
    rules: tuple[Rule, ...],
    text: str,
    convert: Callable[[str], Any] = clean_text,
) -> Any:
    """
    Value of the first rule match that converts to something non-None.
    Rules are tried in table order; within a rule, matches in text order.
    """
    for r in rules:
        for m in r.pattern.finditer(text):
            raw = m.group(r.group)
            if raw is None:
                continue
            value = convert(raw)
            if value is not None:
                return value
    return None


def to_count(raw: str) -> Optional[int]:
    """Positive integer from a captured digit run; None for zero or anything unconvertible."""
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def _normalise_unit(raw: str) -> DurationUnit:
    unit = raw.lower()
    if not unit.endswith("s"):
        unit += "s"
    return DurationUnit(unit)


def first_duration(rules: tuple[Rule, ...], text: str) -> Optional[tuple[int, DurationUnit]]:
    """
    First (count, unit) pair from rules whose pattern captures the count in
    group 1 and the unit in group 2. Zero-length durations are skipped.
    """
    for r in rules:
        for m in r.pattern.finditer(text):
            count = to_count(m.group(1))
            if count is not None:
                return count, _normalise_unit(m.group(2))
    return None

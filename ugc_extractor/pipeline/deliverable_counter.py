"""
Deliverable counting - how many videos/posts a document asks for.

1. Prioritised regex families ("3 videos", "Videos: 3", "deliver 3 videos")
2. Proximity fallback: first integer within a small window of a video term
"""

import re
from typing import Optional

from ugc_extractor.config import settings
from ugc_extractor.pipeline.rules import COUNT, to_count


DELIVERABLE_PATTERNS = [
    re.compile(COUNT + r"\s*(?:video|content item|post|reel)", re.IGNORECASE),
    re.compile(r"(?:video|content item|post|reel)s?\s*(?::|x|\*)\s*" + COUNT + r"(?!\d)", re.IGNORECASE),
    re.compile(r"(?:deliver|create|produce)\s*" + COUNT + r"\s*(?:video|content|post)", re.IGNORECASE),
]

PROXIMITY_TERMS = ("video", "content", "post", "reel", "deliverable")

_BARE_INT = re.compile(r"\b(\d{1,9})\b")


def count_deliverables(text: Optional[str], window: Optional[int] = None) -> Optional[int]:
    """Number of video/content deliverables mentioned in the text, or None."""
    if not text:
        return None
    if window is None:
        window = settings.DELIVERABLE_WINDOW_CHARS

    for pattern in DELIVERABLE_PATTERNS:
        for m in pattern.finditer(text):
            count = to_count(m.group(1))
            if count is not None:
                return count

    lowered = text.lower()
    for term in PROXIMITY_TERMS:
        idx = lowered.find(term)
        if idx == -1:
            continue
        context = text[max(0, idx - window):idx + len(term) + window]
        for m in _BARE_INT.finditer(context):
            count = to_count(m.group(1))
            if count is not None:
                return count

    return None

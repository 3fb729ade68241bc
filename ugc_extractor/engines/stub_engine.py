"""
Stub extraction engine for testing pipeline plumbing.
Returns preset text (or a preset failure) without touching any PDF library.
"""

from typing import Optional

from ugc_extractor.engines.base import TextExtractionError, TextExtractionResult, TextExtractor


class StaticTextExtractor(TextExtractor):
    """Fake adapter that returns the text it was built with."""

    def __init__(self, text: str = "", error_message: Optional[str] = None):
        self.text = text
        self.error_message = error_message
        self.calls = 0

    @property
    def engine_name(self) -> str:
        return "static"

    @property
    def engine_version(self) -> str:
        return "0.1.0"

    def extract_text(self, content: bytes) -> TextExtractionResult:
        self.calls += 1
        if self.error_message is not None:
            return TextExtractionResult.failure(
                TextExtractionError(self.engine_name, "ERR_TEXT_EXTRACTION", self.error_message)
            )
        return TextExtractionResult.success(self.text)

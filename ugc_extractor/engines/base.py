"""
Abstract base class for all text extraction engines.
Every engine turns raw document bytes into a TextExtractionResult.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


class TextExtractionError(Exception):
    """Raw bytes could not be decoded into text."""

    def __init__(self, engine_name: str, error_code: str, message: str):
        self.engine_name = engine_name
        self.error_code = error_code
        self.message = message
        super().__init__(f"[{engine_name}] {error_code}: {message}")


@dataclass(frozen=True)
class TextExtractionResult:
    """Either decoded text or the error that prevented decoding."""
    text: Optional[str] = None
    error: Optional[TextExtractionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None

    @classmethod
    def success(cls, text: str) -> "TextExtractionResult":
        return cls(text=text)

    @classmethod
    def failure(cls, error: TextExtractionError) -> "TextExtractionResult":
        return cls(error=error)


class TextExtractor(ABC):
    """
    Abstract base class for all text extraction engines.

    Every engine must:
    1. Accept raw document bytes
    2. Return TextExtractionResult
    3. Report its name and version
    4. Never raise: failures travel inside the result
    """

    @property
    @abstractmethod
    def engine_name(self) -> str:
        """Unique identifier: 'pdfplumber', 'static'"""
        ...

    @property
    @abstractmethod
    def engine_version(self) -> str:
        """Semver or library version string."""
        ...

    @abstractmethod
    def extract_text(self, content: bytes) -> TextExtractionResult:
        """Decode all text from the document, pages joined by newlines."""
        ...

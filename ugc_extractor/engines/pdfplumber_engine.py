"""
pdfplumber text extraction engine.
Primary path for PDFs with embedded text layers.
"""

import io
from typing import Optional

import pdfplumber
import structlog

from ugc_extractor.config import settings
from ugc_extractor.engines.base import TextExtractionError, TextExtractionResult, TextExtractor

logger = structlog.get_logger(__name__)

PDF_MAGIC = b"%PDF"


class PdfPlumberTextExtractor(TextExtractor):
    """
    Extraction engine using pdfplumber for PDFs with embedded text.
    Concatenates page text in reading order; pages without text contribute nothing.
    """

    engine_name = "pdfplumber"
    engine_version = pdfplumber.__version__

    def __init__(self, max_size_bytes: Optional[int] = None):
        if max_size_bytes is None:
            max_size_bytes = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
        self.max_size_bytes = max_size_bytes

    def _fail(self, error_code: str, message: str) -> TextExtractionResult:
        return TextExtractionResult.failure(
            TextExtractionError(self.engine_name, error_code, message)
        )

    def extract_text(self, content: bytes) -> TextExtractionResult:
        """Extract text from every page of an in-memory PDF."""
        if not content:
            return self._fail("ERR_EMPTY_INPUT", "No document bytes supplied")

        if len(content) > self.max_size_bytes:
            return self._fail(
                "ERR_TOO_LARGE",
                f"Document is {len(content)} bytes (limit {self.max_size_bytes})",
            )

        # Readers accept the header anywhere in the first 1 KB
        if PDF_MAGIC not in content[:1024]:
            return self._fail("ERR_NOT_PDF", "Missing %PDF header")

        try:
            with pdfplumber.open(io.BytesIO(content)) as pdf:
                page_texts = [page.extract_text() or "" for page in pdf.pages]
        except Exception as e:
            return self._fail("ERR_PDF_PARSE", f"pdfplumber failed: {e}")

        text = "\n".join(page_texts)

        # Scanned PDFs have no text layer; there is nothing to extract from
        if not text.strip():
            return self._fail("ERR_NO_TEXT", f"No text layer in {len(page_texts)} page(s)")

        logger.debug(
            "pdfplumber_extraction_complete",
            page_count=len(page_texts),
            char_count=len(text),
        )

        return TextExtractionResult.success(text)

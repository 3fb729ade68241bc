"""
Document processing facade: bytes + document type in, draft record out.

Stages: VALIDATE TYPE → EXTRACT TEXT → EXTRACT FIELDS → FINALIZE

Only an invalid document type is raised to the caller. Unreadable PDFs and
any internal fault degrade to the all-null record of the requested type, so
the user gets an empty draft to complete by hand instead of an error.
"""

import time
from typing import Callable, Optional, Union

import structlog

from ugc_extractor.config import settings
from ugc_extractor.engines.base import TextExtractor
from ugc_extractor.engines.pdfplumber_engine import PdfPlumberTextExtractor
from ugc_extractor.models.enums import DocumentType, ExtractionOutcome
from ugc_extractor.observability.metrics import (
    document_processing_duration_seconds,
    documents_processed_total,
    extraction_fallbacks_total,
    fields_extracted_total,
)
from ugc_extractor.pipeline.contract_extractor import extract_contract_data
from ugc_extractor.pipeline.invoice_extractor import extract_invoice_data
from ugc_extractor.pipeline.post_processor import finalize
from ugc_extractor.schemas.extracted import ExtractedData, empty_record

logger = structlog.get_logger(__name__)


class ExtractionError(Exception):
    """Base error for the extraction facade."""
    def __init__(self, message: str, error_code: str = "ERR_EXTRACTION"):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class InvalidDocumentType(ExtractionError):
    """Document type is neither Invoice nor Contract."""
    def __init__(self, document_type: object):
        self.document_type = document_type
        super().__init__(
            f'Invalid document type {document_type!r}. Must be "Invoice" or "Contract"',
            error_code="ERR_INVALID_DOCUMENT_TYPE",
        )


FIELD_EXTRACTORS: dict[DocumentType, Callable[[str], ExtractedData]] = {
    DocumentType.INVOICE: extract_invoice_data,
    DocumentType.CONTRACT: extract_contract_data,
}


def resolve_document_type(document_type: Union[str, DocumentType]) -> DocumentType:
    try:
        return DocumentType(document_type)
    except (ValueError, TypeError):
        raise InvalidDocumentType(document_type) from None


class PdfDocumentProcessor:
    """
    Facade over text extraction, field extraction and post-processing.
    Holds no per-document state, so one instance can serve concurrent callers.
    """

    def __init__(self, text_extractor: Optional[TextExtractor] = None):
        self.text_extractor = text_extractor or PdfPlumberTextExtractor()

    def process(self, content: bytes, document_type: Union[str, DocumentType]) -> ExtractedData:
        """
        Extract a draft record from raw PDF bytes.
        Raises InvalidDocumentType before touching the bytes; never raises otherwise.
        """
        doc_type = resolve_document_type(document_type)
        started_at = time.time()

        logger.info(
            "extraction_started",
            document_type=doc_type.value,
            size_bytes=len(content) if content else 0,
            engine=self.text_extractor.engine_name,
        )

        try:
            result = self.text_extractor.extract_text(content)
        except Exception:
            logger.error("text_extractor_crashed", document_type=doc_type.value, exc_info=True)
            return self._fallback(doc_type, ExtractionOutcome.INTERNAL_ERROR, started_at)

        if not result.ok:
            logger.warning(
                "text_extraction_failed",
                document_type=doc_type.value,
                error_code=result.error.error_code if result.error else None,
                error=result.error.message if result.error else None,
            )
            return self._fallback(doc_type, ExtractionOutcome.TEXT_EXTRACTION_FAILED, started_at)

        return self._extract_fields(result.text, doc_type, started_at)

    def extract_from_text(self, text: str, document_type: Union[str, DocumentType]) -> ExtractedData:
        """Same guarantees as process(), for text that is already decoded."""
        doc_type = resolve_document_type(document_type)
        return self._extract_fields(text or "", doc_type, time.time())

    def _extract_fields(self, text: str, doc_type: DocumentType, started_at: float) -> ExtractedData:
        try:
            if len(text) > settings.MAX_TEXT_CHARS:
                logger.warning(
                    "text_truncated",
                    char_count=len(text),
                    limit=settings.MAX_TEXT_CHARS,
                )
                text = text[:settings.MAX_TEXT_CHARS]

            logger.debug("text_extracted", preview=text[:settings.TEXT_PREVIEW_CHARS])

            data = FIELD_EXTRACTORS[doc_type](text)
            data = finalize(data, doc_type, text)
        except Exception:
            logger.error("extraction_failed", document_type=doc_type.value, exc_info=True)
            return self._fallback(doc_type, ExtractionOutcome.INTERNAL_ERROR, started_at)

        populated = data.populated_fields()
        for field in populated:
            fields_extracted_total.labels(document_type=doc_type.value, field=field).inc()
        self._record(doc_type, ExtractionOutcome.EXTRACTED, started_at)

        logger.info(
            "extraction_completed",
            document_type=doc_type.value,
            fields=populated,
            record=data.model_dump(mode="json", by_alias=True),
        )
        return data

    def _fallback(self, doc_type: DocumentType, outcome: ExtractionOutcome, started_at: float) -> ExtractedData:
        extraction_fallbacks_total.labels(document_type=doc_type.value, reason=outcome.value).inc()
        self._record(doc_type, outcome, started_at)
        return empty_record(doc_type)

    @staticmethod
    def _record(doc_type: DocumentType, outcome: ExtractionOutcome, started_at: float) -> None:
        documents_processed_total.labels(document_type=doc_type.value, outcome=outcome.value).inc()
        document_processing_duration_seconds.labels(document_type=doc_type.value).observe(
            time.time() - started_at
        )


# ── Singleton instance ───────────────────────────────────────
_processor: Optional[PdfDocumentProcessor] = None


def get_processor() -> PdfDocumentProcessor:
    """Get or create the default pdfplumber-backed processor."""
    global _processor
    if _processor is None:
        _processor = PdfDocumentProcessor()
    return _processor


def process_pdf_document(content: bytes, document_type: Union[str, DocumentType]) -> ExtractedData:
    """Single-call entry point: validate the type, then extract with the default processor."""
    doc_type = resolve_document_type(document_type)
    return get_processor().process(content, doc_type)

"""
Enums shared across the extraction pipeline.
Values of DocumentType MUST match the document types the API layer sends.
"""

from enum import Enum


class DocumentType(str, Enum):
    INVOICE = "Invoice"
    CONTRACT = "Contract"


class ExtractionOutcome(str, Enum):
    EXTRACTED = "EXTRACTED"
    TEXT_EXTRACTION_FAILED = "TEXT_EXTRACTION_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DurationUnit(str, Enum):
    DAYS = "days"
    MONTHS = "months"
    YEARS = "years"

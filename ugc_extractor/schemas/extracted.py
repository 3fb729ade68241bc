"""
Extracted record schemas.
These are the draft records handed to the deal/document layer.
Every field is optional: None means "not found", never "invalid".
"""

from datetime import date
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from ugc_extractor.models.enums import DocumentType


class ExtractedDocumentData(BaseModel):
    """Fields shared by invoices and contracts."""
    creator_name: Optional[str] = None
    client_name: Optional[str] = None
    amount: Optional[Decimal] = Field(default=None, ge=0)
    video_count: Optional[int] = Field(default=None, gt=0)

    # Wire shape uses camelCase (creatorName, dueDate, ...)
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    def populated_fields(self) -> list[str]:
        """Names of fields that carry a value."""
        return [name for name, value in self if value is not None]


class ExtractedInvoiceData(ExtractedDocumentData):
    due_date: Optional[date] = None


class ExtractedContractData(ExtractedDocumentData):
    start_date: Optional[date] = None
    end_date: Optional[date] = None


ExtractedData = Union[ExtractedInvoiceData, ExtractedContractData]


def empty_record(document_type: DocumentType) -> ExtractedData:
    """All-null record for the given document type."""
    if document_type == DocumentType.INVOICE:
        return ExtractedInvoiceData()
    return ExtractedContractData()

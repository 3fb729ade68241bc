"""
Shared test fixtures.
"""

import pytest

from ugc_extractor.engines.stub_engine import StaticTextExtractor
from ugc_extractor.pipeline.orchestrator import PdfDocumentProcessor


@pytest.fixture
def sample_date_strings():
    """Common date string samples for testing (US month-first)."""
    return [
        ("03/01/2025", "2025-03-01"),       # MM/DD/YYYY
        ("15/04/2025", "2025-04-15"),       # DD/MM/YYYY (month 15 impossible)
        ("2025-03-01", "2025-03-01"),       # ISO via YYYY/MM/DD
        ("03/01/25", "2025-03-01"),         # two-digit year
        ("Mar 1, 2025", "2025-03-01"),      # Mon DD, YYYY
        ("March 1, 2025", "2025-03-01"),    # full month name
    ]


@pytest.fixture
def ugc_invoice_text():
    return (
        "INVOICE\n"
        "Bill to: Acme Corp\n"
        "Total (USD): $2,500.00\n"
        "Due date: 04/15/2025\n"
        "Deliver 2 videos\n"
    )


@pytest.fixture
def ugc_contract_text():
    return (
        "UGC Creator Agreement\n"
        "Effective date: 01/01/2025\n"
        "This agreement has a term of 90 days.\n"
    )


@pytest.fixture
def artist_agreement_text():
    return (
        "USER-GENERATED CONTENT ARTIST AGREEMENT\n"
        'This agreement is between Behuman Advertising Limited (hereafter "The Client") '
        'and Jordan Lee (hereafter "UGC Artist").\n'
        "Fee: $900 USD\n"
        "Deliverables: 3x Paid Ad Video Brief\n"
        "Usage: 90 Days\n"
        "Date: 04/01/2025\n"
    )


@pytest.fixture
def vamp_invoice_text():
    return (
        "Vamp Network Invoice\n"
        "Bill to\n"
        "The Loft\n"
        "Jane Smith x UGC\n"
        "3 Videos\n"
        "Total (USD) $1,963.00\n"
        "Next payment due\n"
        "Mar 1, 2025"
    )


@pytest.fixture
def make_processor():
    """Processor wired to a static text extractor."""
    def _make(text: str = "", error_message=None):
        extractor = StaticTextExtractor(text=text, error_message=error_message)
        return PdfDocumentProcessor(text_extractor=extractor), extractor
    return _make


@pytest.fixture
def record_debug(monkeypatch):
    """Swap a module's logger for one that keeps (event, fields) pairs from debug calls."""
    def _record(module):
        events = []

        class _Recorder:
            def debug(self, event, **fields):
                events.append((event, fields))

        monkeypatch.setattr(module, "logger", _Recorder())
        return events
    return _record

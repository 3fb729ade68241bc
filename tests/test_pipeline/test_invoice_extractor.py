"""
Tests for invoice field extraction (both rule tracks and fallbacks).
"""

from datetime import date
from decimal import Decimal

from ugc_extractor.pipeline import invoice_extractor
from ugc_extractor.pipeline.invoice_extractor import extract_invoice_data, name_from_email


class TestCreatorInvoice:

    def test_labelled_fields(self, ugc_invoice_text):
        data = extract_invoice_data(ugc_invoice_text)
        assert data.client_name == "Acme Corp"
        assert data.amount == Decimal("2500.00")
        assert data.due_date == date(2025, 4, 15)
        assert data.video_count == 2
        assert data.creator_name is None

    def test_client_from_email(self):
        text = (
            "Invoice\n"
            "Payment for UGC content\n"
            "Contact: jane.doe@brand.com\n"
            "Total: $800.00\n"
        )
        data = extract_invoice_data(text)
        assert data.client_name == "Jane Doe"
        assert data.amount == Decimal("800.00")

    def test_creator_label(self):
        text = "Invoice\nCreator: Sam Park\nBill to: Glow Labs\n2 videos $400\n"
        data = extract_invoice_data(text)
        assert data.creator_name == "Sam Park"
        assert data.client_name == "Glow Labs"
        assert data.amount == Decimal("400")

    def test_latest_date_used_as_due_date(self):
        text = (
            "Invoice\n"
            "Bill to: Brand Co\n"
            "UGC video package $600\n"
            "Issued: 03/01/2025\n"
            "Service period ends 03/31/2025\n"
        )
        data = extract_invoice_data(text)
        assert data.due_date == date(2025, 3, 31)
        assert data.amount == Decimal("600")


class TestGenericInvoice:

    def test_labelled_fields(self):
        text = (
            "ACME SUPPLIES\n"
            "Invoice\n"
            "Customer: Northwind Traders\n"
            "Amount: $1,200.00\n"
            "Due date: 05/01/2025\n"
        )
        data = extract_invoice_data(text)
        assert data.client_name == "Northwind Traders"
        assert data.amount == Decimal("1200.00")
        assert data.due_date == date(2025, 5, 1)
        assert data.creator_name == "ACME SUPPLIES"
        assert data.video_count is None

    def test_nothing_found(self):
        data = extract_invoice_data("Thank you for your business")
        assert data.populated_fields() == []


class TestKnownTemplate:

    def test_vamp_network_invoice(self, vamp_invoice_text):
        data = extract_invoice_data(vamp_invoice_text)
        assert data.client_name == "The Loft"
        assert data.amount == Decimal("1963.00")
        assert data.due_date == date(2025, 3, 1)
        assert data.creator_name == "Jane Smith"
        assert data.video_count == 3


class TestNameFromEmail:

    def test_dotted_local_part(self):
        assert name_from_email("reach me at john.doe@example.com") == "John Doe"

    def test_underscore_and_dash(self):
        assert name_from_email("mary_ann-lee@studio.co.uk") == "Mary Ann Lee"

    def test_no_email(self):
        assert name_from_email("no contact here") is None


class TestClassificationSignals:

    def test_signals_in_summary(self, ugc_invoice_text, record_debug):
        events = record_debug(invoice_extractor)
        extract_invoice_data(ugc_invoice_text)
        event, fields = events[-1]
        assert event == "invoice_fields_extracted"
        assert fields["creator_invoice"] is True
        assert fields["signals"] == ["INVOICE:invoice", "CREATOR:video"]

    def test_generic_track_signals(self, record_debug):
        events = record_debug(invoice_extractor)
        extract_invoice_data("Invoice\nCustomer: Northwind Traders\n")
        _, fields = events[-1]
        assert fields["creator_invoice"] is False
        assert fields["signals"] == ["INVOICE:invoice"]

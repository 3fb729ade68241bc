"""
Tests for contract field extraction and end-date derivation.
"""

from datetime import date, timedelta
from decimal import Decimal

from ugc_extractor.pipeline import contract_extractor
from ugc_extractor.pipeline.contract_extractor import (
    derive_contract_dates,
    extract_contract_data,
)
from ugc_extractor.schemas.extracted import ExtractedContractData


class TestUgcContract:

    def test_term_from_start_date(self, ugc_contract_text):
        data = extract_contract_data(ugc_contract_text)
        assert data.start_date == date(2025, 1, 1)
        assert data.end_date == date(2025, 4, 1)

    def test_explicit_end_date_wins(self):
        text = (
            "Influencer Agreement\n"
            "Effective date: 02/01/2025\n"
            "Terminates on: 06/30/2025\n"
            "Term of 12 months\n"
        )
        data = extract_contract_data(text)
        assert data.start_date == date(2025, 2, 1)
        assert data.end_date == date(2025, 6, 30)

    def test_month_term_and_brand(self):
        text = (
            "Influencer Agreement\n"
            "Agreement dated 03/15/2025.\n"
            "Brand: Glow Labs\n"
            "Usage rights for 6 months from posting\n"
        )
        data = extract_contract_data(text)
        assert data.client_name == "Glow Labs"
        assert data.start_date == date(2025, 3, 15)
        assert data.end_date == date(2025, 9, 15)

    def test_bare_days_start_today(self):
        data = extract_contract_data("Creator agreement: content usage 30 days")
        today = date.today()
        assert data.start_date == today
        assert data.end_date == today + timedelta(days=30)

    def test_specific_deliverable_rule_overrides_count(self):
        text = "UGC agreement\nCreator will produce 2 x videos and 1 reel\n"
        data = extract_contract_data(text)
        assert data.video_count == 2

    def test_fee_label(self):
        data = extract_contract_data("UGC agreement\nFee: $750 per video\n")
        assert data.amount == Decimal("750")


class TestGenericContract:

    def test_labelled_fields(self):
        text = (
            "SERVICES CONTRACT\n"
            "Contractor: Jamie Rivera\n"
            "Client: Northwind Traders\n"
            "Compensation: $4,000.00\n"
            "Start date: 02/01/2025\n"
            "End date: 07/31/2025\n"
        )
        data = extract_contract_data(text)
        assert data.creator_name == "Jamie Rivera"
        assert data.client_name == "Northwind Traders"
        assert data.amount == Decimal("4000.00")
        assert data.start_date == date(2025, 2, 1)
        assert data.end_date == date(2025, 7, 31)
        assert data.video_count is None


class TestKnownTemplate:

    def test_artist_agreement(self, artist_agreement_text):
        data = extract_contract_data(artist_agreement_text)
        assert data.client_name == "Behuman Advertising Limited"
        assert data.amount == Decimal("900")
        assert data.video_count == 3
        assert data.start_date == date(2025, 4, 1)
        assert data.end_date == date(2025, 6, 30)

    def test_artist_agreement_without_signature_date(self, artist_agreement_text):
        text = artist_agreement_text.replace("Date: 04/01/2025\n", "")
        data = extract_contract_data(text)
        today = date.today()
        assert data.start_date == today
        assert data.end_date == today + timedelta(days=90)


class TestDeriveContractDates:

    def test_keeps_explicit_dates(self):
        data = ExtractedContractData(start_date=date(2025, 1, 1), end_date=date(2025, 2, 1))
        derive_contract_dates("term of 90 days", data)
        assert data.end_date == date(2025, 2, 1)

    def test_no_start_no_duration(self):
        data = ExtractedContractData()
        derive_contract_dates("no dates at all", data)
        assert data.start_date is None
        assert data.end_date is None

    def test_zero_days_ignored(self):
        data = ExtractedContractData()
        derive_contract_dates("0 days notice", data)
        assert data.start_date is None

    def test_end_before_start_is_kept(self):
        text = "Start date: 05/01/2025\nEnd date: 01/01/2025\n"
        data = extract_contract_data(text)
        assert data.start_date == date(2025, 5, 1)
        assert data.end_date == date(2025, 1, 1)

    def test_out_of_range_term_leaves_end_empty(self):
        text = "Start date: 05/01/2025\nThe term of 999999999 days applies.\n"
        data = extract_contract_data(text)
        assert data.start_date == date(2025, 5, 1)
        assert data.end_date is None


class TestLongInputs:

    def test_long_digit_run_is_not_a_term(self):
        text = "Start date: 05/01/2025\nterm of " + "1" * 5000 + " days\n"
        data = extract_contract_data(text)
        assert data.end_date is None

    def test_signals_in_summary(self, ugc_contract_text, record_debug):
        events = record_debug(contract_extractor)
        extract_contract_data(ugc_contract_text)
        event, fields = events[-1]
        assert event == "contract_fields_extracted"
        assert fields["ugc_contract"] is True
        assert fields["signals"][:2] == ["UGC:ugc", "CONTRACT:agreement"]

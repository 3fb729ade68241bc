"""
Tests for UGC contract / creator invoice detection.
"""

from ugc_extractor.pipeline.doc_classifier import (
    classify_document,
    is_creator_invoice,
    is_ugc_contract,
)


class TestIsUgcContract:

    def test_needs_both_vocabularies(self):
        assert is_ugc_contract("Influencer agreement")

    def test_ugc_term_alone(self):
        assert not is_ugc_contract("Influencer")

    def test_contract_term_alone(self):
        assert not is_ugc_contract("Master services contract")

    def test_case_insensitive(self):
        assert is_ugc_contract("USER-GENERATED CONTENT ARTIST AGREEMENT")


class TestIsCreatorInvoice:

    def test_creator_invoice(self):
        assert is_creator_invoice("UGC invoice for 3 videos")

    def test_plain_invoice(self):
        assert not is_creator_invoice("Invoice for consulting hours")

    def test_empty(self):
        assert not is_creator_invoice("")


class TestClassifyDocument:

    def test_signals_report_first_hit_per_vocabulary(self):
        result = classify_document("UGC invoice for 3 videos")
        assert result.is_creator_invoice
        assert not result.is_ugc_contract
        assert result.signals == ["UGC:ugc", "INVOICE:invoice", "CREATOR:ugc"]

    def test_both_predicates(self):
        result = classify_document("Influencer agreement. Invoice total for video content")
        assert result.is_ugc_contract
        assert result.is_creator_invoice

"""
Tests for deliverable counting.
"""

from ugc_extractor.pipeline.deliverable_counter import count_deliverables


class TestCountDeliverables:

    def test_count_before_noun(self):
        assert count_deliverables("Please deliver 3 videos by Friday") == 3

    def test_labelled_count(self):
        assert count_deliverables("Videos: 4") == 4

    def test_times_notation(self):
        assert count_deliverables("Reels x 2") == 2

    def test_proximity_fallback(self):
        assert count_deliverables("Deliverables (5)") == 5

    def test_proximity_window_respected(self):
        text = "Deliverables are listed below in the attached schedule 7"
        assert count_deliverables(text) is None
        assert count_deliverables(text, window=60) == 7

    def test_zero_is_not_a_count(self):
        assert count_deliverables("0 videos") is None

    def test_nothing_found(self):
        assert count_deliverables("No deliverables listed") is None
        assert count_deliverables("") is None

    def test_long_digit_run_is_not_a_count(self):
        assert count_deliverables("1" * 5000 + " videos") is None

    def test_labelled_long_digit_run_is_not_a_count(self):
        assert count_deliverables("Videos: " + "1" * 5000) is None

"""Tests for multi-source reconciliation."""

import math

from src.asset_tracker.reconciler import reconcile, round_half_up


class TestReconcile:
    def test_two_sources_averaged(self):
        assert reconcile([300000, 310000]) == 305000

    def test_one_source_failed(self):
        assert reconcile([300000, None]) == 300000

    def test_all_sources_failed(self):
        assert reconcile([None, None]) is None

    def test_empty(self):
        assert reconcile([]) is None

    def test_nan_readings_are_dropped(self):
        assert reconcile([math.nan, 250000.0]) == 250000

    def test_mean_is_rounded(self):
        assert reconcile([100000.0, 100001.0]) == 100001
        assert reconcile([300000.4]) == 300000

    def test_zero_is_a_valid_reading(self):
        assert reconcile([0.0, None]) == 0


class TestRoundHalfUp:
    def test_half_rounds_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3

    def test_negative_half_rounds_toward_positive(self):
        assert round_half_up(-2.5) == -2

    def test_below_half_rounds_down(self):
        assert round_half_up(2.49) == 2

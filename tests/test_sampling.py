"""Tests for sampling-based analysis of long texts."""

import pytest

from token_estimate.sampling import sample_positions, sample_stats, should_sample
from token_estimate.taxonomy import BASIC, SCRIPT, BasicStats, ScriptStats


class TestShouldSample:
    @pytest.mark.parametrize(
        ("length", "enabled", "threshold", "size", "expected"),
        [
            (2000, True, 1000, 100, True),
            (1000, True, 1000, 100, False),  # length must exceed threshold
            (2000, False, 1000, 100, False),
            (2000, True, 0, 100, False),
            (2000, True, 1000, 0, False),
            (2000, True, -1, 100, False),
            (0, True, 1000, 100, False),
        ],
    )
    def test_decision(self, length, enabled, threshold, size, expected):
        assert should_sample(length, enabled, threshold, size) is expected


class TestSamplePositions:
    def test_evenly_spaced(self):
        positions = sample_positions(2000, 100)
        assert len(positions) == 100
        assert positions[0] == 0
        assert positions[1] == 20
        assert positions[-1] == 1980

    def test_sample_size_larger_than_text(self):
        assert list(sample_positions(5, 10)) == [0, 1, 2, 3, 4]

    def test_empty_text(self):
        assert len(sample_positions(0, 10)) == 0

    def test_never_out_of_bounds(self):
        for length in range(1, 60):
            for size in range(1, 70):
                positions = sample_positions(length, size)
                assert len(positions) == min(length, size)
                assert all(0 <= p < length for p in positions)


class TestSampleStats:
    def test_scaled_counts(self):
        text = "a" * 150 + "1" * 50
        # positions 0, 50, 100, 150 -> a, a, a, 1; scale 50
        assert sample_stats(text, BASIC, 4) == BasicStats(letters=150, digits=50)

    def test_rounds_to_nearest(self):
        # positions 0, 3, 6 -> a, 1, a; scale 10/3
        assert sample_stats("a1a1a1a1a1", BASIC, 3) == BasicStats(letters=7, digits=3)

    def test_rounds_half_up(self):
        # positions 0, 2 -> a, 1; scale 2.5 -> 3 each
        assert sample_stats("a11aa", BASIC, 2) == BasicStats(letters=3, digits=3)

    def test_full_sample_matches_full_classification(self):
        text = "Hello, 世界! 123 ñandú café " * 3
        assert sample_stats(text, BASIC, len(text)) == BASIC.classify(text)
        assert sample_stats(text, SCRIPT, len(text) + 50) == SCRIPT.classify(text)

    def test_correction_applies_after_scaling(self):
        text = "é" * 10 + "a" * 10
        # positions 0, 10 -> é, a; scale 10 -> ext 10, letters 10, cap 0
        assert sample_stats(text, SCRIPT, 2) == ScriptStats(latin_letters=10, symbols=10)

    def test_repetitive_text(self):
        stats = sample_stats("ab" * 100, SCRIPT, 10)
        assert stats == ScriptStats(latin_letters=200)

    def test_empty_text(self):
        assert sample_stats("", BASIC, 10) == BasicStats()

"""
Tests for weighted segment selection.
"""

from collections import Counter

import pytest

from domain.models.segment import SegmentSet
from domain.services.weighted_selector import WeightedSelector, pick_weighted_index
from tests.conftest import SequenceRandom, UniformGrid


def _set_with_weights(weights):
    return SegmentSet.from_tuples([(str(i), "#fff", w) for i, w in enumerate(weights)])


class TestPickWeightedIndex:
    """Tests for the cumulative-weight walk."""

    @pytest.mark.parametrize(
        "u,expected",
        [
            (0.0, 0),
            (0.24, 0),
            (0.25, 0),  # r == acc lands on the earlier segment
            (0.26, 1),
            (0.74, 2),
            (0.99, 3),
        ],
    )
    def test_equal_weights_boundaries(self, u, expected):
        assert pick_weighted_index([1, 1, 1, 1], u) == expected

    def test_weights_are_proportional(self):
        # Cumulative: 1, 4 -> r = u * 4
        assert pick_weighted_index([1, 3], 0.2) == 0
        assert pick_weighted_index([1, 3], 0.3) == 1

    def test_all_zero_weights_fall_back_to_uniform(self):
        assert pick_weighted_index([0, 0, 0], 0.0) == 0
        assert pick_weighted_index([0, 0, 0], 0.34) == 1
        assert pick_weighted_index([0, 0, 0], 0.99) == 2

    def test_zero_weight_segment_never_wins(self):
        """Even u == 0 must not land on a leading zero-weight segment."""
        assert pick_weighted_index([0, 1], 0.0) == 1
        for u in (0.0, 0.1, 0.5, 0.999999):
            assert pick_weighted_index([0, 2, 0, 1], u) in (1, 3)

    def test_negative_weights_count_as_zero(self):
        assert pick_weighted_index([-5, 1], 0.0) == 1
        assert pick_weighted_index([-1, -1], 0.6) == 1  # all non-positive -> uniform

    def test_rounding_overflow_returns_last_positive(self):
        """A sample at the very top of the range still yields a valid index."""
        weights = [0.1] * 10
        assert pick_weighted_index(weights, 1.0 - 1e-16) == 9
        assert pick_weighted_index([1, 1, 0], 1.0) == 1


class TestWeightedSelector:
    """Tests for the WeightedSelector service."""

    def test_rejects_sets_below_two_segments(self):
        selector = WeightedSelector()
        assert selector.select(_set_with_weights([1]), 0.5) is None
        assert selector.pick(_set_with_weights([]), SequenceRandom([0.5])) is None

    def test_pick_uses_random_source(self):
        selector = WeightedSelector()
        rng = SequenceRandom([0.9])
        assert selector.pick(_set_with_weights([1, 1]), rng) == 1
        assert rng.calls == 1

    def test_equal_weights_fairness(self):
        """Four equal weights split a uniform sweep into quarters."""
        selector = WeightedSelector()
        segment_set = _set_with_weights([1, 1, 1, 1])
        rng = UniformGrid(1000)

        counts = Counter(selector.pick(segment_set, rng) for _ in range(10000))

        for index in range(4):
            assert counts[index] / 10000 == pytest.approx(0.25, abs=0.01)

    def test_zero_weight_fallback_is_uniform(self):
        """Weights [0, 0, 0] select every index, not always index 0."""
        selector = WeightedSelector()
        segment_set = _set_with_weights([0, 0, 0])
        rng = UniformGrid(300)

        counts = Counter(selector.pick(segment_set, rng) for _ in range(3000))

        assert set(counts) == {0, 1, 2}
        for index in range(3):
            assert counts[index] / 3000 == pytest.approx(1 / 3, abs=0.01)

    def test_seeded_distribution_follows_weights(self, seeded_rng):
        selector = WeightedSelector()
        segment_set = _set_with_weights([1, 2, 0, 7])

        counts = Counter(selector.pick(segment_set, seeded_rng) for _ in range(20000))

        assert counts[2] == 0
        assert counts[0] / 20000 == pytest.approx(0.1, abs=0.02)
        assert counts[1] / 20000 == pytest.approx(0.2, abs=0.02)
        assert counts[3] / 20000 == pytest.approx(0.7, abs=0.02)

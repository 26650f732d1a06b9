"""
Weighted segment selection domain service.
"""

import math

from domain.models.segment import SegmentSet


def pick_weighted_index(weights: list[float], u: float) -> int:
    """
    Map a uniform sample onto an index, proportionally to weights.

    Negative weights count as zero. When every weight is zero the choice
    falls back to uniform over all indices.

    Args:
        weights: Per-index weights (at least one entry)
        u: Uniform sample in [0, 1)

    Returns:
        Index in [0, len(weights))
    """
    n = len(weights)
    total = sum(max(0.0, w) for w in weights)

    if total <= 0:
        return min(int(math.floor(u * n)), n - 1)

    r = u * total
    acc = 0.0
    last_positive = n - 1
    for i, w in enumerate(weights):
        if w <= 0:
            # Zero-weight segments never win, even when r == acc == 0
            continue
        acc += w
        last_positive = i
        if r <= acc:
            return i

    # Float accumulation fell short of r
    return last_positive


class WeightedSelector:
    """
    Pure domain service choosing the winning segment.

    The random source is injected so selection is reproducible under a seed.
    """

    def select(self, segment_set: SegmentSet, u: float) -> int | None:
        """
        Choose an index for a given uniform sample.

        Returns:
            Winning index, or None if the set has fewer than two segments
        """
        if not segment_set.is_spinnable:
            return None
        return pick_weighted_index(segment_set.weights, u)

    def pick(self, segment_set: SegmentSet, rng) -> int | None:
        """Choose an index using rng.random() as the uniform source."""
        if not segment_set.is_spinnable:
            return None
        return self.select(segment_set, rng.random())

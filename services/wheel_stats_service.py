"""
WheelStatsService: selection odds and fairness checks for a wheel.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy import stats

from domain.models.segment import SegmentSet
from domain.services.weighted_selector import WeightedSelector


@dataclass(frozen=True)
class FairnessReport:
    """
    Chi-square goodness-of-fit of observed spins against the configured odds.

    Attributes:
        spins: Number of spins observed
        chi_square: Test statistic over the positive-probability segments
        p_value: Probability of a deviation at least this large under the odds
        impossible_hits: Spins that landed on zero-probability segments
    """

    spins: int
    chi_square: float
    p_value: float
    impossible_hits: int = 0

    def is_consistent(self, alpha: float = 0.01) -> bool:
        return self.impossible_hits == 0 and self.p_value >= alpha


class WheelStatsService:
    """Computes exact and simulated selection frequencies."""

    def __init__(self, selector: WeightedSelector | None = None):
        self.selector = selector or WeightedSelector()

    def segment_probabilities(self, segment_set: SegmentSet) -> list[float]:
        """
        Exact probability of each segment winning a spin.

        Returns:
            One probability per segment (uniform when every weight is zero),
            or an empty list if the wheel cannot spin
        """
        if not segment_set.is_spinnable:
            return []
        weights = segment_set.weights
        total = sum(weights)
        if total <= 0:
            return [1.0 / len(weights)] * len(weights)
        return [w / total for w in weights]

    def simulate_spins(self, segment_set: SegmentSet, rng, count: int) -> np.ndarray:
        """
        Run `count` selections and tally the winners.

        Returns:
            Integer array of hits per segment (empty if the wheel cannot spin)
        """
        if not segment_set.is_spinnable:
            return np.zeros(0, dtype=int)
        counts = np.zeros(len(segment_set), dtype=int)
        for _ in range(max(0, count)):
            counts[self.selector.pick(segment_set, rng)] += 1
        return counts

    def fairness_test(self, counts, probabilities: list[float]) -> FairnessReport:
        """
        Compare observed counts with expected probabilities.

        Segments with zero probability are left out of the chi-square test;
        any hits on them are reported separately since they should never occur.
        """
        observed = np.asarray(counts, dtype=float)
        expected_p = np.asarray(probabilities, dtype=float)
        spins = int(observed.sum())

        possible = expected_p > 0
        impossible_hits = int(observed[~possible].sum())

        obs = observed[possible]
        if obs.sum() == 0 or possible.sum() < 2:
            return FairnessReport(spins=spins, chi_square=0.0, p_value=1.0, impossible_hits=impossible_hits)

        exp = expected_p[possible] / expected_p[possible].sum() * obs.sum()
        chi_square, p_value = stats.chisquare(obs, exp)

        return FairnessReport(
            spins=spins,
            chi_square=float(chi_square),
            p_value=float(p_value),
            impossible_hits=impossible_hits,
        )

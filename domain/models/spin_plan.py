"""
Spin plan domain model.
"""

from collections.abc import Callable
from dataclasses import dataclass

# Floor applied to duration so a zero-length plan finishes on its first tick
MIN_DURATION = 0.001

# Slack for elapsed time summed from float frame deltas (10 x 0.1 < 1.0)
COMPLETION_EPSILON = 1e-9


@dataclass(frozen=True)
class SpinPlan:
    """
    Immutable description of one spin.

    Angles are in degrees and unbounded: end_angle encodes every full turn,
    so end_angle - start_angle may be several multiples of 360.
    """

    start_angle: float
    end_angle: float
    duration: float
    easing: Callable[[float], float]
    target_index: int
    turns: int

    @property
    def total_rotation(self) -> float:
        return self.end_angle - self.start_angle

    def progress(self, elapsed: float) -> float:
        """Linear progress through the plan, clamped to [0, 1]."""
        k = elapsed / max(MIN_DURATION, self.duration)
        return min(1.0, max(0.0, k))

    def angle_at(self, elapsed: float) -> float:
        """Eased orientation after `elapsed` seconds."""
        k = self.progress(elapsed)
        return self.start_angle + (self.end_angle - self.start_angle) * self.easing(k)

    def is_complete(self, elapsed: float) -> bool:
        return elapsed >= max(MIN_DURATION, self.duration) - COMPLETION_EPSILON

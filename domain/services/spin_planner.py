"""
Spin planning domain service.

Turns "land on segment i" into a concrete rotation: always forward, always
at least min_turns full turns, ending with the segment's center under the
pointer at the top of the wheel.
"""

import math

from domain.models.segment import SegmentSet
from domain.models.spin_plan import SpinPlan
from domain.services.easing import EasingFunction, ease_in_out


def forward_delta(current_angle: float, target_angle: float) -> float:
    """
    Smallest non-negative forward rotation taking current_angle to target_angle.

    Returns:
        Delta in [0, 360)
    """
    delta = ((target_angle - current_angle) % 360.0 + 360.0) % 360.0
    # -1e-15 % 360 rounds up to exactly 360.0
    return 0.0 if delta >= 360.0 else delta


class SpinPlanner:
    """
    Pure domain service producing SpinPlans.

    Responsibilities:
    - Compute the forward delta to the target segment's center
    - Draw the number of full turns and the duration from their ranges
    """

    def __init__(
        self,
        min_turns: int = 4,
        max_turns: int = 8,
        min_duration: float = 2.8,
        max_duration: float = 4.5,
        easing: EasingFunction = ease_in_out,
    ):
        """
        Initialize the planner.

        Reversed ranges are swapped and negative values clamp to zero.

        Args:
            min_turns: Fewest full turns per spin (inclusive)
            max_turns: Most full turns per spin (inclusive)
            min_duration: Shortest spin in seconds
            max_duration: Longest spin in seconds
            easing: Curve applied to linear progress
        """
        min_turns, max_turns = max(0, int(min_turns)), max(0, int(max_turns))
        min_duration, max_duration = max(0.0, float(min_duration)), max(0.0, float(max_duration))
        self.min_turns = min(min_turns, max_turns)
        self.max_turns = max(min_turns, max_turns)
        self.min_duration = min(min_duration, max_duration)
        self.max_duration = max(min_duration, max_duration)
        self.easing = easing

    def draw_turns(self, u: float) -> int:
        """Uniform integer in [min_turns, max_turns] from a sample in [0, 1)."""
        span = self.max_turns - self.min_turns + 1
        return min(self.min_turns + int(math.floor(u * span)), self.max_turns)

    def draw_duration(self, u: float) -> float:
        return self.min_duration + (self.max_duration - self.min_duration) * u

    def plan(
        self,
        current_angle: float,
        target_index: int,
        segment_set: SegmentSet,
        rng,
    ) -> SpinPlan | None:
        """
        Plan a spin from current_angle to the center of segment target_index.

        Args:
            current_angle: Present orientation in degrees (any real value)
            target_index: Segment that must end under the pointer
            segment_set: Segments defining the layout
            rng: Source with random() -> float in [0, 1)

        Returns:
            SpinPlan, or None if the set has fewer than two segments
        """
        target = segment_set.center_angle(target_index)
        if target is None:
            return None

        delta = forward_delta(current_angle, target)
        turns = self.draw_turns(rng.random())
        duration = self.draw_duration(rng.random())

        return SpinPlan(
            start_angle=current_angle,
            end_angle=current_angle + turns * 360.0 + delta,
            duration=duration,
            easing=self.easing,
            target_index=target_index,
            turns=turns,
        )

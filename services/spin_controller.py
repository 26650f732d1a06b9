"""
SpinController: frame-driven spin state machine.

Owns the Idle/Spinning phase of one wheel. The host calls tick(dt) once per
frame; the controller eases the orientation along the active SpinPlan, pushes
it to the render sink, and on the final tick snaps exactly onto the plan's
end angle and announces the winner once.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum

from domain.models.layout import WheelLayout
from domain.models.segment import Segment, SegmentSet
from domain.models.spin_plan import SpinPlan
from domain.services.layout_service import build_layout
from domain.services.spin_planner import SpinPlanner
from domain.services.weighted_selector import WeightedSelector
from services import error_codes
from services.interfaces import CompletionSink, ISpinController, IWheelRenderSink
from services.result import Result

logger = logging.getLogger("fortune_bot.services.spin_controller")


class SpinPhase(Enum):
    IDLE = "idle"
    SPINNING = "spinning"


@dataclass(frozen=True)
class TickResult:
    """Orientation after a tick, and whether that tick finished the spin."""

    angle: float
    finished: bool


@dataclass(frozen=True)
class SpinOutcome:
    index: int
    label: str
    angle: float


class SpinController(ISpinController):
    """
    Drives one wheel through its spins.

    Responsibilities:
    - Reject spin requests while spinning or with fewer than two segments
    - Advance the active plan by elapsed time
    - Report each winner exactly once
    - Keep the render sink's layout in step with the SegmentSet
    """

    def __init__(
        self,
        segment_set: SegmentSet | None = None,
        planner: SpinPlanner | None = None,
        selector: WeightedSelector | None = None,
        rng: random.Random | None = None,
        render_sink: IWheelRenderSink | None = None,
        keep_labels_upright: bool = True,
        label_radius: float = 140.0,
        initial_angle: float = 0.0,
    ):
        """
        Initialize the controller.

        Args:
            segment_set: Wheel contents (defaults to the stock eight segments)
            planner: Spin planner (defaults to SpinPlanner())
            selector: Winner selection (defaults to WeightedSelector())
            rng: Uniform random source; pass a seeded Random for reproducible spins
            render_sink: Optional drawing layer
            keep_labels_upright: Send a label counter-rotation with every orientation
            label_radius: Distance of labels from the wheel center in the layout
            initial_angle: Resting orientation before the first spin
        """
        self.segment_set = segment_set if segment_set is not None else SegmentSet.default()
        self.planner = planner or SpinPlanner()
        self.selector = selector or WeightedSelector()
        self.rng = rng or random.Random()
        self.render_sink = render_sink
        self.keep_labels_upright = keep_labels_upright
        self.label_radius = label_radius

        self._phase = SpinPhase.IDLE
        self._plan: SpinPlan | None = None
        self._pending_label: str | None = None
        self._elapsed = 0.0
        self._angle = float(initial_angle)
        self._layout: WheelLayout | None = None
        self._listeners: list[CompletionSink] = []
        self.last_result: SpinOutcome | None = None

    # State queries

    @property
    def phase(self) -> SpinPhase:
        return self._phase

    @property
    def is_spinning(self) -> bool:
        return self._phase is SpinPhase.SPINNING

    @property
    def current_angle(self) -> float:
        return self._angle

    @property
    def plan(self) -> SpinPlan | None:
        return self._plan

    @property
    def elapsed(self) -> float:
        return self._elapsed

    @property
    def layout(self) -> WheelLayout | None:
        return self._layout

    @property
    def is_layout_stale(self) -> bool:
        """True when the SegmentSet changed since the last rebuild."""
        if self._layout is None:
            return self.segment_set.is_spinnable
        return self._layout.version != self.segment_set.version

    def on_spin_finished(self, callback: CompletionSink) -> None:
        self._listeners.append(callback)

    # Spin entry points

    def _check_can_start(self) -> Result | None:
        if self._phase is SpinPhase.SPINNING:
            logger.debug("Spin request ignored: wheel already spinning")
            return Result.fail("The wheel is already spinning.", code=error_codes.SPIN_IN_PROGRESS)
        if not self.segment_set.is_spinnable:
            logger.debug(f"Spin request ignored: {len(self.segment_set)} segment(s)")
            return Result.fail(
                "The wheel needs at least two segments to spin.",
                code=error_codes.NOT_ENOUGH_SEGMENTS,
            )
        return None

    def spin(self) -> Result[SpinPlan]:
        """
        Pick a weighted winner and start spinning towards it.

        Returns:
            Result with the new SpinPlan, or a failure if the spin did not start
        """
        rejected = self._check_can_start()
        if rejected is not None:
            return rejected
        index = self.selector.pick(self.segment_set, self.rng)
        return self._start(index)

    def spin_to_index(self, index: int) -> Result[SpinPlan]:
        """
        Spin towards a fixed segment, bypassing weighted selection.

        Out-of-range indices are clamped into the wheel.
        """
        rejected = self._check_can_start()
        if rejected is not None:
            return rejected
        return self._start(self.segment_set.clamp_index(index))

    def _start(self, index: int) -> Result[SpinPlan]:
        plan = self.planner.plan(self._angle, index, self.segment_set, self.rng)
        self._plan = plan
        self._pending_label = self.segment_set[index].label
        self._elapsed = 0.0
        self._phase = SpinPhase.SPINNING
        logger.info(
            f"Spin started towards segment {index} ({self._pending_label!r}): "
            f"{plan.start_angle:.1f} -> {plan.end_angle:.1f} deg, "
            f"{plan.turns} turns over {plan.duration:.2f}s"
        )
        return Result.ok(plan)

    # Frame driving

    def tick(self, dt: float) -> TickResult:
        """
        Advance the active spin by dt seconds.

        A tick that reaches the end of the plan completes the spin in the
        same call. Ticks while idle change nothing.

        Args:
            dt: Seconds since the previous frame; negative values count as zero

        Returns:
            TickResult with the orientation after this tick
        """
        if self._phase is SpinPhase.IDLE or self._plan is None:
            return TickResult(angle=self._angle, finished=False)

        if dt > 0:
            self._elapsed += dt
        elif dt < 0:
            logger.debug(f"Ignoring negative frame delta {dt}")

        if self._plan.is_complete(self._elapsed):
            return self._complete()

        self._angle = self._plan.angle_at(self._elapsed)
        self._emit_orientation(self._angle)
        return TickResult(angle=self._angle, finished=False)

    def _complete(self) -> TickResult:
        plan = self._plan
        label = self._pending_label or ""

        # Exact end pose, not the eased approximation
        self._angle = plan.end_angle
        self._phase = SpinPhase.IDLE
        self._plan = None
        self._pending_label = None
        self._elapsed = 0.0
        self._emit_orientation(self._angle)

        self.last_result = SpinOutcome(index=plan.target_index, label=label, angle=self._angle)
        logger.info(f"Spin finished on segment {plan.target_index} ({label!r})")

        for callback in list(self._listeners):
            try:
                callback(plan.target_index, label)
            except Exception:
                logger.exception(f"Spin completion handler {callback!r} failed")

        return TickResult(angle=self._angle, finished=True)

    def cancel(self) -> bool:
        """
        Stop the active spin where it is, without announcing a winner.

        Returns:
            True if a spin was cancelled, False if the wheel was idle
        """
        if self._phase is SpinPhase.IDLE:
            return False
        logger.info(f"Spin towards segment {self._plan.target_index} cancelled at {self._angle:.1f} deg")
        self._phase = SpinPhase.IDLE
        self._plan = None
        self._pending_label = None
        self._elapsed = 0.0
        return True

    def _emit_orientation(self, angle: float) -> None:
        if self.render_sink is None:
            return
        label_rotation = -angle if self.keep_labels_upright else None
        self.render_sink.set_orientation(angle, label_rotation)

    # Layout

    def rebuild(self) -> WheelLayout | None:
        """
        Recompute slice and label layout from the SegmentSet.

        Call after any segment change. With fewer than two segments the
        render sink is cleared and None is returned.
        """
        self._layout = build_layout(self.segment_set, self.label_radius)
        if self.render_sink is not None:
            self.render_sink.draw_layout(self._layout)
            if self._layout is not None:
                self._emit_orientation(self._angle)
        return self._layout

    # Segment editing (rejected mid-spin)

    def _check_can_edit(self) -> Result | None:
        if self._phase is SpinPhase.SPINNING:
            return Result.fail(
                "Segments cannot be changed while the wheel is spinning.",
                code=error_codes.SPIN_IN_PROGRESS,
            )
        return None

    def add_segment(self, label: str, color: str = "#ffffff", weight: float = 1.0) -> Result[Segment]:
        rejected = self._check_can_edit()
        if rejected is not None:
            return rejected
        segment = self.segment_set.add_segment(label, color, weight)
        self.rebuild()
        return Result.ok(segment)

    def remove_segment_at(self, index: int) -> Result[None]:
        rejected = self._check_can_edit()
        if rejected is not None:
            return rejected
        if not self.segment_set.remove_at(index):
            return Result.fail(f"No segment at index {index}.", code=error_codes.SEGMENT_NOT_FOUND)
        self.rebuild()
        return Result.ok()

    def remove_segment_by_label(self, label: str) -> Result[None]:
        rejected = self._check_can_edit()
        if rejected is not None:
            return rejected
        if not self.segment_set.remove_by_label(label):
            return Result.fail(f"No segment labelled '{label}'.", code=error_codes.SEGMENT_NOT_FOUND)
        self.rebuild()
        return Result.ok()

    def clear_segments(self) -> Result[None]:
        rejected = self._check_can_edit()
        if rejected is not None:
            return rejected
        self.segment_set.clear()
        self.rebuild()
        return Result.ok()

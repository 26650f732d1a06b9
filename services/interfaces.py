"""
Service layer interfaces (ABCs).

These define the seams between the wheel core and whatever hosts it: the
render sink that draws slices and follows the orientation, and the spin
controller contract the host drives once per frame.

Usage:
    class MyRenderer(IWheelRenderSink):
        def draw_layout(self, layout): ...
        def set_orientation(self, angle, label_rotation=None): ...
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from domain.models.layout import WheelLayout
    from domain.models.spin_plan import SpinPlan
    from services.result import Result
    from services.spin_controller import SpinPhase, TickResult

# Receives (winning index, winning label) once per completed spin
CompletionSink = Callable[[int, str], None]


class IWheelRenderSink(ABC):
    """Interface for the layer that draws the wheel."""

    @abstractmethod
    def draw_layout(self, layout: "WheelLayout | None") -> None:
        """Replace all slices and labels. None means nothing is drawable."""
        ...

    @abstractmethod
    def set_orientation(self, angle: float, label_rotation: float | None = None) -> None:
        """
        Rotate the wheel to an absolute orientation in degrees.

        label_rotation, when given, is the rotation every label should carry
        relative to the wheel so that it stays upright on screen.
        """
        ...


class ISpinController(ABC):
    """Interface for the frame-driven spin state machine."""

    @property
    @abstractmethod
    def phase(self) -> "SpinPhase":
        ...

    @property
    @abstractmethod
    def current_angle(self) -> float:
        ...

    @abstractmethod
    def spin(self) -> "Result[SpinPlan]":
        """Pick a weighted winner and start spinning towards it."""
        ...

    @abstractmethod
    def spin_to_index(self, index: int) -> "Result[SpinPlan]":
        """Start spinning towards a fixed segment (index is clamped)."""
        ...

    @abstractmethod
    def tick(self, dt: float) -> "TickResult":
        """Advance the active spin by dt seconds."""
        ...

    @abstractmethod
    def cancel(self) -> bool:
        """Stop the active spin without announcing a winner."""
        ...

    @abstractmethod
    def rebuild(self) -> "WheelLayout | None":
        """Recompute the layout and hand it to the render sink."""
        ...

    @abstractmethod
    def on_spin_finished(self, callback: CompletionSink) -> None:
        """Register a completion sink."""
        ...

"""
Wheel layout models handed to the rendering layer on every rebuild.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SliceLayout:
    """One slice: starts at start_angle (clockwise from top) and spans sweep degrees."""

    index: int
    start_angle: float
    sweep: float
    color: str


@dataclass(frozen=True)
class LabelLayout:
    """
    One label, positioned relative to the wheel center.

    x/y use a y-up frame with 0 degrees at the top, so a label on the
    first half of the wheel has positive x. Rotation is in degrees,
    counter-clockwise positive, and turns the text to read along the radius.
    """

    index: int
    x: float
    y: float
    rotation: float
    text: str


@dataclass(frozen=True)
class WheelLayout:
    slice_angle: float
    label_radius: float
    slices: tuple[SliceLayout, ...]
    labels: tuple[LabelLayout, ...]
    version: int = 0

    def __len__(self) -> int:
        return len(self.slices)

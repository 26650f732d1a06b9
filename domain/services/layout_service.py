"""
Wheel layout domain service.

Derives slice and label placement from a SegmentSet.
"""

import math

from domain.models.layout import LabelLayout, SliceLayout, WheelLayout
from domain.models.segment import SegmentSet


def build_layout(segment_set: SegmentSet, label_radius: float = 140.0) -> WheelLayout | None:
    """
    Compute slice and label placement for every segment.

    Angles are clockwise from the top. Label positions use a y-up frame,
    so the label of the segment centered at 90 degrees sits at (r, 0).

    Args:
        segment_set: Segments in wheel order
        label_radius: Distance from the wheel center to each label

    Returns:
        WheelLayout, or None if there are fewer than two segments
    """
    slice_angle = segment_set.slice_angle
    if slice_angle is None:
        return None

    slices = []
    labels = []
    for i, segment in enumerate(segment_set):
        slices.append(
            SliceLayout(
                index=i,
                start_angle=i * slice_angle,
                sweep=slice_angle,
                color=segment.color,
            )
        )

        center = segment_set.center_angle(i)
        rad = math.radians(center)
        labels.append(
            LabelLayout(
                index=i,
                x=math.sin(rad) * label_radius,
                y=math.cos(rad) * label_radius,
                rotation=-center,
                text=segment.label,
            )
        )

    return WheelLayout(
        slice_angle=slice_angle,
        label_radius=label_radius,
        slices=tuple(slices),
        labels=tuple(labels),
        version=segment_set.version,
    )

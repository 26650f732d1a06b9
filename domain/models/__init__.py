"""
Domain models - pure data structures describing the wheel.
"""

from domain.models.layout import LabelLayout, SliceLayout, WheelLayout
from domain.models.segment import Segment, SegmentSet
from domain.models.spin_plan import SpinPlan

__all__ = ["Segment", "SegmentSet", "SpinPlan", "WheelLayout", "SliceLayout", "LabelLayout"]

"""
Pytest fixtures for tests.

Provides deterministic random sources and small segment sets shared across
the wheel test modules.
"""

import random

import pytest

from domain.models.segment import SegmentSet
from domain.services.easing import linear
from domain.services.spin_planner import SpinPlanner
from services.spin_controller import SpinController


class SequenceRandom:
    """
    Random source that returns a fixed sequence of samples, cycling forever.

    Stands in for random.Random wherever only random() is used.
    """

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


class UniformGrid(SequenceRandom):
    """Cycles evenly through [0, 1) in `steps` buckets (sample at each bucket midpoint)."""

    def __init__(self, steps: int):
        super().__init__([(i + 0.5) / steps for i in range(steps)])


class RecordingSink:
    """Render sink that records every call for assertions."""

    def __init__(self):
        self.layouts = []
        self.orientations = []

    def draw_layout(self, layout):
        self.layouts.append(layout)

    def set_orientation(self, angle, label_rotation=None):
        self.orientations.append((angle, label_rotation))


@pytest.fixture
def abcd_segments():
    """Four equal-weight segments A, B, C, D."""
    return SegmentSet.from_tuples(
        [
            ("A", "#e74c3c", 1.0),
            ("B", "#3498db", 1.0),
            ("C", "#2ecc71", 1.0),
            ("D", "#f1c40f", 1.0),
        ]
    )


@pytest.fixture
def seeded_rng():
    return random.Random(1234)


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def fixed_planner():
    """Planner with exactly 5 turns and a 2 second linear spin."""
    return SpinPlanner(min_turns=5, max_turns=5, min_duration=2.0, max_duration=2.0, easing=linear)


@pytest.fixture
def controller(abcd_segments, fixed_planner, seeded_rng, recording_sink):
    return SpinController(
        segment_set=abcd_segments,
        planner=fixed_planner,
        rng=seeded_rng,
        render_sink=recording_sink,
    )

"""
Segment domain models.
"""

from dataclasses import dataclass, field


# Stock wheel: eight equal slices, labels "1".."8"
DEFAULT_SEGMENTS = [
    ("1", "#f25959", 1.0),
    ("2", "#59a6f2", 1.0),
    ("3", "#73e68c", 1.0),
    ("4", "#f2d959", 1.0),
    ("5", "#bf73f2", 1.0),
    ("6", "#59e6d9", 1.0),
    ("7", "#f28cbf", 1.0),
    ("8", "#a6a6a6", 1.0),
]


@dataclass
class Segment:
    """
    One weighted slice of the wheel.

    The color is opaque to selection logic; it only travels to the renderer.
    """

    label: str = "Item"
    color: str = "#ffffff"
    weight: float = 1.0

    def __post_init__(self):
        self.weight = max(0.0, float(self.weight))


@dataclass
class SegmentSet:
    """
    Ordered collection of segments.

    Order defines angular position: segment i covers
    [i * slice_angle, (i + 1) * slice_angle) degrees clockwise from the top.
    Layout and spinning are only defined for two or more segments.
    """

    segments: list[Segment] = field(default_factory=list)
    version: int = 0

    @classmethod
    def default(cls) -> "SegmentSet":
        """Build the stock eight-segment wheel."""
        return cls.from_tuples(DEFAULT_SEGMENTS)

    @classmethod
    def from_tuples(cls, items: list[tuple[str, str, float]]) -> "SegmentSet":
        """Build a set from (label, color, weight) tuples."""
        return cls([Segment(label, color, weight) for label, color, weight in items])

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self):
        return iter(self.segments)

    def __getitem__(self, index: int) -> Segment:
        return self.segments[index]

    # Mutation

    def _touch(self) -> None:
        self.version += 1

    def add_segment(self, label: str, color: str = "#ffffff", weight: float = 1.0) -> Segment:
        """Append a segment. Negative weights are clamped to zero."""
        segment = Segment(label=label, color=color, weight=weight)
        self.segments.append(segment)
        self._touch()
        return segment

    def remove_at(self, index: int) -> bool:
        """Remove the segment at index. Out-of-range indices are ignored."""
        if index < 0 or index >= len(self.segments):
            return False
        del self.segments[index]
        self._touch()
        return True

    def remove_by_label(self, label: str) -> bool:
        """
        Remove the first segment whose label matches, ignoring case.

        Returns:
            True if a segment was removed
        """
        wanted = label.casefold()
        for i, segment in enumerate(self.segments):
            if segment.label.casefold() == wanted:
                del self.segments[i]
                self._touch()
                return True
        return False

    def clear(self) -> None:
        self.segments.clear()
        self._touch()

    # Derived values

    @property
    def is_spinnable(self) -> bool:
        return len(self.segments) >= 2

    @property
    def labels(self) -> list[str]:
        return [s.label for s in self.segments]

    @property
    def weights(self) -> list[float]:
        return [max(0.0, s.weight) for s in self.segments]

    @property
    def total_weight(self) -> float:
        return sum(self.weights)

    @property
    def slice_angle(self) -> float | None:
        """Angular width of one segment in degrees, or None below two segments."""
        if not self.is_spinnable:
            return None
        return 360.0 / len(self.segments)

    def center_angle(self, index: int) -> float | None:
        """Clockwise angle from the top to the middle of segment `index`."""
        slice_angle = self.slice_angle
        if slice_angle is None:
            return None
        return index * slice_angle + slice_angle / 2

    def clamp_index(self, index: int) -> int:
        """Clamp an index into [0, n - 1]."""
        if not self.segments:
            return 0
        return min(max(index, 0), len(self.segments) - 1)

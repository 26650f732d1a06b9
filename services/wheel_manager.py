"""
Wheel management.

Keeps one SpinController per guild in memory, built from configured defaults.
Wheels are independent of each other and are not persisted.
"""

import logging
import random

from config import (
    WHEEL_DEFAULT_SEGMENTS,
    WHEEL_EASING,
    WHEEL_GIF_SIZE,
    WHEEL_KEEP_LABELS_UPRIGHT,
    WHEEL_LABEL_RADIUS,
    WHEEL_MAX_DURATION,
    WHEEL_MAX_TURNS,
    WHEEL_MIN_DURATION,
    WHEEL_MIN_TURNS,
    WHEEL_RANDOM_SEED,
)
from domain.models.segment import SegmentSet
from domain.services.easing import get_easing
from domain.services.spin_planner import SpinPlanner
from services.spin_controller import SpinController
from utils.wheel_drawing import PillowWheelRenderer

logger = logging.getLogger("fortune_bot.services.wheel_manager")


def build_default_controller(
    segments: list[tuple[str, str, float]] | None = None,
    seed: int | None = None,
    size: int = WHEEL_GIF_SIZE,
) -> SpinController:
    """
    Build a controller wired to a Pillow renderer using config defaults.

    Args:
        segments: (label, color, weight) tuples; falls back to
            WHEEL_DEFAULT_SEGMENTS, then the stock eight-segment wheel
        seed: Seed for the wheel's random source (None for unseeded)
        size: Rendered image size in pixels
    """
    items = segments if segments is not None else WHEEL_DEFAULT_SEGMENTS
    segment_set = SegmentSet.from_tuples(items) if items else SegmentSet.default()

    renderer = PillowWheelRenderer(size=size)
    planner = SpinPlanner(
        min_turns=WHEEL_MIN_TURNS,
        max_turns=WHEEL_MAX_TURNS,
        min_duration=WHEEL_MIN_DURATION,
        max_duration=WHEEL_MAX_DURATION,
        easing=get_easing(WHEEL_EASING),
    )
    controller = SpinController(
        segment_set=segment_set,
        planner=planner,
        rng=random.Random(seed),
        render_sink=renderer,
        keep_labels_upright=WHEEL_KEEP_LABELS_UPRIGHT,
        label_radius=renderer.radius * WHEEL_LABEL_RADIUS,
    )
    controller.rebuild()
    return controller


class WheelManager:
    """
    Holds the wheel of every guild.

    Structure: dict[guild_id, SpinController]; DMs share guild id 0.
    """

    def __init__(self, seed: int | None = WHEEL_RANDOM_SEED, factory=build_default_controller):
        self._wheels: dict[int, SpinController] = {}
        self._seed = seed
        self._factory = factory

    @staticmethod
    def _normalize(guild_id: int | None) -> int:
        return guild_id if guild_id is not None else 0

    def get(self, guild_id: int | None) -> SpinController:
        """Get the guild's wheel, creating it from defaults on first use."""
        key = self._normalize(guild_id)
        controller = self._wheels.get(key)
        if controller is None:
            seed = None if self._seed is None else self._seed + key
            controller = self._factory(seed=seed)
            self._wheels[key] = controller
            logger.info(f"Created wheel for guild {key} with {len(controller.segment_set)} segments")
        return controller

    def reset(self, guild_id: int | None) -> SpinController | None:
        """
        Replace the guild's wheel with a fresh default one.

        Returns:
            The new controller, or None if the current wheel is mid-spin
        """
        key = self._normalize(guild_id)
        current = self._wheels.get(key)
        if current is not None and current.is_spinning:
            logger.warning(f"Not resetting wheel for guild {key}: spin in progress")
            return None
        self._wheels.pop(key, None)
        return self.get(key)

    def has_wheel(self, guild_id: int | None) -> bool:
        return self._normalize(guild_id) in self._wheels

    def guild_ids(self) -> list[int]:
        return sorted(self._wheels)

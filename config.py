"""
Centralized configuration for the Wheel of Fortune bot.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


def _parse_int(env_var: str, default: int) -> int:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_optional_int(env_var: str) -> int | None:
    raw = os.getenv(env_var)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _parse_float(env_var: str, default: float) -> float:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _parse_bool(env_var: str, default: bool) -> bool:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _parse_int_list(env_var: str, default: list[int]) -> list[int]:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return [int(x.strip()) for x in raw.split(",") if x.strip()]
    except ValueError:
        return default


def parse_segment_list(raw: str | None) -> list[tuple[str, str, float]] | None:
    """
    Parse "label:weight:color" entries separated by commas.

    Weight and color are optional ("Jackpot:0.5", "Lose"). Returns None when
    the value is unset or any entry is malformed, so the caller falls back
    to its default wheel.
    """
    if raw is None or not raw.strip():
        return None
    segments = []
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        parts = [p.strip() for p in entry.split(":")]
        label = parts[0]
        try:
            weight = float(parts[1]) if len(parts) > 1 and parts[1] else 1.0
        except ValueError:
            return None
        color = parts[2] if len(parts) > 2 and parts[2] else "#ffffff"
        segments.append((label, color, weight))
    return segments or None


DISCORD_BOT_TOKEN = os.getenv("DISCORD_BOT_TOKEN")
ADMIN_USER_IDS: list[int] = _parse_int_list("ADMIN_USER_IDS", [])

# Spin planning
WHEEL_MIN_TURNS = _parse_int("WHEEL_MIN_TURNS", 4)
WHEEL_MAX_TURNS = _parse_int("WHEEL_MAX_TURNS", 8)
WHEEL_MIN_DURATION = _parse_float("WHEEL_MIN_DURATION", 2.8)  # seconds
WHEEL_MAX_DURATION = _parse_float("WHEEL_MAX_DURATION", 4.5)  # seconds
WHEEL_EASING = os.getenv("WHEEL_EASING", "ease_in_out")

# Unset means a fresh unseeded generator per wheel
WHEEL_RANDOM_SEED = _parse_optional_int("WHEEL_RANDOM_SEED")

# Rendering
WHEEL_KEEP_LABELS_UPRIGHT = _parse_bool("WHEEL_KEEP_LABELS_UPRIGHT", True)
WHEEL_LABEL_RADIUS = _parse_float("WHEEL_LABEL_RADIUS", 0.72)  # fraction of wheel radius
WHEEL_GIF_SIZE = _parse_int("WHEEL_GIF_SIZE", 400)  # pixels
WHEEL_GIF_FPS = _parse_int("WHEEL_GIF_FPS", 20)
WHEEL_RESULT_HOLD_MS = _parse_int("WHEEL_RESULT_HOLD_MS", 60000)  # final frame hold

# Segments for new wheels, e.g. "Jackpot:0.5:#f1c40f,Lose:3:#4a4a4a"
WHEEL_DEFAULT_SEGMENTS = parse_segment_list(os.getenv("WHEEL_DEFAULT_SEGMENTS"))

# Sample size for the simulated distribution on /wheel_odds
WHEEL_ODDS_SIMULATION_SPINS = _parse_int("WHEEL_ODDS_SIMULATION_SPINS", 10000)

"""
Easing curves for spin animation.

Every curve maps [0, 1] onto [0, 1] monotonically with ease(0) == 0 and
ease(1) == 1.
"""

from collections.abc import Callable

EasingFunction = Callable[[float], float]


def linear(t: float) -> float:
    return t


def ease_in_out(t: float) -> float:
    """Cubic Hermite with flat tangents at both ends (smoothstep)."""
    return t * t * (3 - 2 * t)


def ease_out_cubic(t: float) -> float:
    return 1 - pow(1 - t, 3)


def ease_out_quint(t: float) -> float:
    # Long glide into the pointer
    return 1 - pow(1 - t, 5)


EASINGS: dict[str, EasingFunction] = {
    "linear": linear,
    "ease_in_out": ease_in_out,
    "ease_out_cubic": ease_out_cubic,
    "ease_out_quint": ease_out_quint,
}


def get_easing(name: str) -> EasingFunction:
    """
    Look up an easing curve by name.

    Raises:
        ValueError: If the name is not a known curve
    """
    key = name.strip().lower().replace("-", "_")
    try:
        return EASINGS[key]
    except KeyError:
        known = ", ".join(sorted(EASINGS))
        raise ValueError(f"Unknown easing '{name}'. Expected one of: {known}") from None

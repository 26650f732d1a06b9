"""
Chart generation for wheel odds.
"""

from io import BytesIO

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from matplotlib.colors import is_color_like  # noqa: E402

# Discord-like dark theme colors
DISCORD_BG = "#36393F"
DISCORD_DARKER = "#2F3136"
DISCORD_ACCENT = "#5865F2"
DISCORD_YELLOW = "#FEE75C"
DISCORD_GREY = "#B9BBBE"
DISCORD_BORDER = "#4F545C"


def _empty_chart(message: str) -> BytesIO:
    fig, ax = plt.subplots(figsize=(6.5, 4), facecolor=DISCORD_BG)
    ax.set_facecolor(DISCORD_DARKER)
    ax.text(0.5, 0.5, message, ha="center", va="center", color="white", fontsize=14)
    ax.set_xticks([])
    ax.set_yticks([])
    fp = BytesIO()
    fig.savefig(fp, format="PNG", dpi=100, bbox_inches="tight", facecolor=DISCORD_BG)
    plt.close(fig)
    fp.seek(0)
    return fp


def draw_odds_chart(
    labels: list[str],
    probabilities: list[float],
    observed: list[int] | np.ndarray | None = None,
    colors: list[str] | None = None,
) -> BytesIO:
    """
    Horizontal bar chart of each segment's chance to win.

    Args:
        labels: Segment labels in wheel order
        probabilities: Exact win probability per segment
        observed: Optional simulated hit counts to overlay as frequencies
        colors: Optional bar colors (segment colors)

    Returns:
        BytesIO containing the PNG image
    """
    if not labels or not probabilities:
        return _empty_chart("Wheel needs at least two segments")

    probs = np.asarray(probabilities, dtype=float) * 100
    y = np.arange(len(labels))

    height = max(3.0, 0.45 * len(labels) + 1.5)
    fig, ax = plt.subplots(figsize=(6.5, height), facecolor=DISCORD_BG)
    ax.set_facecolor(DISCORD_DARKER)

    usable_colors = colors and len(colors) == len(labels) and all(is_color_like(c) for c in colors)
    bar_colors = colors if usable_colors else DISCORD_ACCENT
    ax.barh(y, probs, color=bar_colors, edgecolor=DISCORD_BG, linewidth=0.5, label="Configured odds")

    if observed is not None and len(observed) == len(labels):
        counts = np.asarray(observed, dtype=float)
        total = counts.sum()
        if total > 0:
            freq = counts / total * 100
            ax.scatter(freq, y, color=DISCORD_YELLOW, marker="D", s=28, zorder=3, label=f"Simulated (n={int(total)})")

    for yi, p in zip(y, probs):
        ax.text(p, yi, f" {p:.1f}%", va="center", color="white", fontsize=8)

    ax.set_yticks(y)
    ax.set_yticklabels(labels)
    ax.invert_yaxis()  # Wheel order top to bottom
    ax.set_xlabel("Chance to win (%)", color=DISCORD_GREY, fontsize=11)
    ax.set_xlim(0, max(probs.max() * 1.25, 1))
    ax.tick_params(colors=DISCORD_GREY, labelsize=9)
    for spine in ax.spines.values():
        spine.set_color(DISCORD_BORDER)

    ax.set_title(f"Wheel Odds ({len(labels)} segments)", color="white", fontsize=13, fontweight="bold", pad=10)
    ax.legend(loc="lower right", facecolor=DISCORD_DARKER, edgecolor=DISCORD_BORDER, labelcolor="white", fontsize=8)

    plt.tight_layout()

    fp = BytesIO()
    fig.savefig(fp, format="PNG", dpi=100, bbox_inches="tight", facecolor=DISCORD_BG)
    plt.close(fig)
    fp.seek(0)
    return fp

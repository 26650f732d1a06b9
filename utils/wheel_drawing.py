"""Wheel of Fortune image generation using Pillow."""

from __future__ import annotations

import io
import math

from PIL import Image, ImageColor, ImageDraw, ImageFont
from pilmoji import Pilmoji

from domain.models.layout import LabelLayout, WheelLayout
from services.interfaces import IWheelRenderSink
from services.result import Result

# Cached fonts for performance (loaded once, not per frame)
_CACHED_FONTS: dict[str, ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}

# Cached static overlay (pointer, center circle, center text) - drawn once per size
_CACHED_STATIC_OVERLAY: dict[int, Image.Image] = {}

# Cache for pre-rendered label images (avoids re-rendering text per GIF frame)
_CACHED_LABEL_TEXT: dict[tuple[str, int, str], Image.Image] = {}

BACKGROUND = (30, 30, 35, 255)


def _get_cached_font(size: int, font_key: str, bold: bool = False) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Get a cached font, loading it only on first access."""
    cache_key = f"{font_key}_{size}_{'bold' if bold else 'regular'}"
    if cache_key not in _CACHED_FONTS:
        try:
            font_name = "DejaVuSans-Bold.ttf" if bold else "DejaVuSans.ttf"
            font_path = f"/usr/share/fonts/truetype/dejavu/{font_name}"
            _CACHED_FONTS[cache_key] = ImageFont.truetype(font_path, size)
        except OSError:
            _CACHED_FONTS[cache_key] = ImageFont.load_default()
    return _CACHED_FONTS[cache_key]


def _has_emoji(text: str) -> bool:
    """Check if text contains emoji characters."""
    return any(ord(c) > 0x1F00 for c in text)


def wheel_radius(size: int) -> int:
    """Pixel radius of the wheel inside a square image of `size` pixels."""
    return size // 2 - 50


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    """Convert a color string to RGB. Unparseable colors render white."""
    try:
        return ImageColor.getrgb(color)[:3]
    except (ValueError, AttributeError, TypeError):
        return (255, 255, 255)


def _get_label_image(
    text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont, size: int, fill: str = "#ffffff"
) -> Image.Image:
    """
    Render a label with its drop shadow onto a tight transparent tile, cached.

    Emoji labels go through pilmoji; plain text uses ImageDraw directly.
    """
    cache_key = (text, size, fill)
    if cache_key not in _CACHED_LABEL_TEXT:
        probe = ImageDraw.Draw(Image.new("RGBA", (1, 1)))
        bbox = probe.textbbox((0, 0), text, font=font)
        width = max(1, bbox[2] - bbox[0] + 4)
        height = max(1, bbox[3] - bbox[1] + 4)
        if _has_emoji(text):
            width += size * 2
        tile = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        origin = (1 - bbox[0], 1 - bbox[1])
        if _has_emoji(text):
            with Pilmoji(tile) as pilmoji:
                pilmoji.text(origin, text, font=font, fill=fill)
        else:
            draw = ImageDraw.Draw(tile)
            draw.text((origin[0] + 1, origin[1] + 1), text, fill="#000000", font=font)
            draw.text(origin, text, fill=fill, font=font)
        _CACHED_LABEL_TEXT[cache_key] = tile
    return _CACHED_LABEL_TEXT[cache_key]


def _get_static_overlay(size: int) -> Image.Image:
    """Get cached static overlay with pointer and center elements."""
    if size not in _CACHED_STATIC_OVERLAY:
        _CACHED_STATIC_OVERLAY[size] = _create_static_overlay(size)
    return _CACHED_STATIC_OVERLAY[size]


def _create_static_overlay(size: int) -> Image.Image:
    """Create the static overlay (pointer, center circle, text) once."""
    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)

    center = size // 2
    radius = wheel_radius(size)
    inner_radius = radius // 3

    title_font = _get_cached_font(max(9, size // 45), "title")

    draw.ellipse(
        [
            center - inner_radius,
            center - inner_radius,
            center + inner_radius,
            center + inner_radius,
        ],
        fill="#2c3e50",
        outline="#f1c40f",
        width=4,
    )

    for i, text in enumerate(["WHEEL OF", "FORTUNE"]):
        bbox = draw.textbbox((0, 0), text, font=title_font)
        text_w = bbox[2] - bbox[0]
        draw.text(
            (center - text_w / 2, center - 12 + i * 16),
            text,
            fill="#f1c40f",
            font=title_font,
        )

    # Pointer at the top marks the winning position
    pointer_y = center - radius - 5
    pointer_points = [
        (center, pointer_y + 35),
        (center - 18, pointer_y - 8),
        (center - 6, pointer_y + 2),
        (center, pointer_y + 18),
        (center + 6, pointer_y + 2),
        (center + 18, pointer_y - 8),
    ]
    draw.polygon(pointer_points, fill="#e74c3c", outline="#ffffff", width=2)

    return img


def _label_screen_position(label: LabelLayout, center: int, orientation: float) -> tuple[float, float]:
    """
    Rotate a label's wheel-local offset by the wheel orientation.

    The layout is y-up with counter-clockwise rotation, screen space is y-down.
    """
    theta = math.radians(orientation)
    x = label.x * math.cos(theta) - label.y * math.sin(theta)
    y = label.x * math.sin(theta) + label.y * math.cos(theta)
    return center + x, center - y


def create_wheel_frame(
    layout: WheelLayout,
    size: int,
    orientation: float,
    label_rotation: float | None = None,
    selected_idx: int | None = None,
) -> Image.Image:
    """
    Draw the wheel at a given orientation.

    Args:
        layout: Slice and label placement, label offsets in pixels
        size: Image size in pixels (square)
        orientation: Wheel orientation in degrees; the segment whose center
            angle equals the orientation sits under the pointer
        label_rotation: Label rotation relative to the wheel; None keeps the
            radial rotation from the layout
        selected_idx: Winning slice to highlight

    Returns:
        PIL Image object
    """
    img = Image.new("RGBA", (size, size), BACKGROUND)
    draw = ImageDraw.Draw(img)

    center = size // 2
    radius = wheel_radius(size)
    label_font = _get_cached_font(max(12, size // 32), "small", bold=True)
    bounds = [center - radius, center - radius, center + radius, center + radius]

    # Outer glow ring
    for glow in range(5, 0, -1):
        glow_radius = radius + glow * 3
        draw.ellipse(
            [
                center - glow_radius,
                center - glow_radius,
                center + glow_radius,
                center + glow_radius,
            ],
            outline=(255, 215, 0, 30 - glow * 5),
            width=2,
        )

    # Pillow measures angles clockwise from 3 o'clock
    for wedge in layout.slices:
        start_angle = wedge.start_angle - orientation - 90
        end_angle = start_angle + wedge.sweep

        wedge_color = hex_to_rgb(wedge.color)
        outline_color = "#ffffff"
        outline_width = 2
        if selected_idx is not None and wedge.index == selected_idx:
            wedge_color = tuple(min(255, c + 120) for c in wedge_color)
            outline_color = "#ffff00"
            outline_width = 12

        draw.pieslice(
            bounds,
            start_angle,
            end_angle,
            fill=wedge_color,
            outline=outline_color,
            width=outline_width,
        )

    for label in layout.labels:
        if not label.text:
            continue
        tile = _get_label_image(label.text, label_font, max(12, size // 32))
        world_rotation = orientation + (label.rotation if label_rotation is None else label_rotation)
        if world_rotation % 360:
            tile = tile.rotate(world_rotation, resample=Image.BICUBIC, expand=True)
        text_x, text_y = _label_screen_position(label, center, orientation)
        layer = Image.new("RGBA", img.size, (0, 0, 0, 0))
        layer.paste(tile, (int(text_x - tile.width / 2), int(text_y - tile.height / 2)), tile)
        img = Image.alpha_composite(img, layer)

    draw = ImageDraw.Draw(img)
    if selected_idx is not None and 0 <= selected_idx < len(layout.slices):
        win = layout.slices[selected_idx]
        win_angle = win.start_angle - orientation - 90
        for glow_offset in range(3, 0, -1):
            draw.arc(
                [center - radius - 2, center - radius - 2, center + radius + 2, center + radius + 2],
                win_angle,
                win_angle + win.sweep,
                fill=(255, 255, 0, 200 - glow_offset * 50),
                width=12 + glow_offset * 4,
            )

    return Image.alpha_composite(img, _get_static_overlay(size))


def create_empty_wheel_image(size: int) -> Image.Image:
    """Placeholder shown when the wheel has fewer than two segments."""
    img = Image.new("RGBA", (size, size), BACKGROUND)
    draw = ImageDraw.Draw(img)
    center = size // 2
    radius = wheel_radius(size)
    draw.ellipse(
        [center - radius, center - radius, center + radius, center + radius],
        outline="#4a4a4a",
        width=4,
    )
    font = _get_cached_font(max(12, size // 25), "small", bold=True)
    text = "ADD SEGMENTS"
    bbox = draw.textbbox((0, 0), text, font=font)
    draw.text((center - (bbox[2] - bbox[0]) / 2, center - (bbox[3] - bbox[1]) / 2), text, fill="#b9bbbe", font=font)
    return img


def wheel_image_to_bytes(img: Image.Image) -> io.BytesIO:
    """Convert PIL Image to bytes buffer for Discord."""
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    buffer.seek(0)
    return buffer


class PillowWheelRenderer(IWheelRenderSink):
    """
    Render sink that keeps the latest layout and orientation and draws
    frames on demand.
    """

    def __init__(self, size: int = 400):
        self.size = size
        self.layout: WheelLayout | None = None
        self.orientation = 0.0
        self.label_rotation: float | None = None

    @property
    def radius(self) -> int:
        return wheel_radius(self.size)

    def draw_layout(self, layout: WheelLayout | None) -> None:
        self.layout = layout

    def set_orientation(self, angle: float, label_rotation: float | None = None) -> None:
        self.orientation = angle
        self.label_rotation = label_rotation

    def render(self, selected_idx: int | None = None) -> Image.Image:
        if self.layout is None:
            return create_empty_wheel_image(self.size)
        return create_wheel_frame(
            self.layout,
            self.size,
            self.orientation,
            label_rotation=self.label_rotation,
            selected_idx=selected_idx,
        )


def create_wheel_gif(
    controller,
    renderer: PillowWheelRenderer | None = None,
    fps: int = 20,
    target_idx: int | None = None,
    hold_ms: int = 60000,
) -> tuple[io.BytesIO | None, Result]:
    """
    Spin the controller's wheel and record every tick as a GIF frame.

    The controller is ticked at a fixed 1/fps step until the spin finishes,
    so the GIF plays back at the same pace a live wheel would turn. The
    last frame highlights the winner and is held for hold_ms.

    Args:
        controller: SpinController whose render sink is the renderer
        renderer: Sink to draw from (defaults to controller.render_sink)
        fps: Frames per second of the animation
        target_idx: Force the outcome instead of a weighted pick
        hold_ms: How long the final frame stays on screen

    Returns:
        (GIF buffer, spin Result). The buffer is None if the spin did not start.
    """
    renderer = renderer or controller.render_sink
    if not isinstance(renderer, PillowWheelRenderer):
        raise ValueError("create_wheel_gif needs a PillowWheelRenderer")

    if controller.is_layout_stale:
        controller.rebuild()

    result = controller.spin() if target_idx is None else controller.spin_to_index(target_idx)
    if not result:
        return None, result

    plan = result.value
    fps = max(1, fps)
    dt = 1.0 / fps
    frame_ms = int(round(1000 / fps))

    frames = [renderer.render()]
    durations = [frame_ms]
    while True:
        tick = controller.tick(dt)
        if tick.finished:
            frames.append(renderer.render(selected_idx=plan.target_index))
            durations.append(hold_ms)
            break
        frames.append(renderer.render())
        durations.append(frame_ms)

    palette_frames = [
        frame.convert("RGB").convert("P", palette=Image.ADAPTIVE, colors=256) for frame in frames
    ]

    buffer = io.BytesIO()
    palette_frames[0].save(
        buffer,
        format="GIF",
        save_all=True,
        append_images=palette_frames[1:],
        duration=durations,
        loop=1,  # Play once, hold on final frame
    )
    buffer.seek(0)
    return buffer, result

"""
Module: output.overlay

Purpose:
    Draw lines, their handles and (for feedback) their target zones onto
    the background image, and read the background image's size, which is
    the size of the drop area.

Key Functions:
    - background_size(): Pixel size of a background image file
    - render_lines(): Draw placed lines over a copy of the background
    - render_home_tray(): Draw the lines still waiting in the home tray
    - draw_zones(): Draw target zones over a copy of an image

Dependencies:
    - PIL: Image drawing

Used By:
    - Presentation shell (external), feedback images
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from drawlines_toolkit.core.models import Container, Coordinate, QuestionDefinition
from drawlines_toolkit.interaction.controller import LineView

logger = logging.getLogger(__name__)

# Default settings
DEFAULT_LINE_COLOR = "#0f6cbf"
DEFAULT_HOME_COLOR = "#6a737b"
DEFAULT_ZONE_COLOR = "#ff9900"
DEFAULT_LINE_WIDTH = 3
DEFAULT_FONT_SIZE = 14


class ImageNotFoundError(Exception):
    """Background image missing or unreadable."""
    pass


def background_size(path: Path) -> Tuple[int, int]:
    """
    Read the (width, height) of a background image.

    Raises:
        ImageNotFoundError: If the file is missing or not an image
    """
    try:
        with Image.open(path) as img:
            return img.size
    except FileNotFoundError as e:
        raise ImageNotFoundError(f"Background image not found: {path}") from e
    except OSError as e:
        raise ImageNotFoundError(f"Cannot read background image {path}: {e}") from e


def render_lines(
    image: Image.Image,
    views: Iterable[LineView],
    *,
    color: str = DEFAULT_LINE_COLOR,
    width: int = DEFAULT_LINE_WIDTH,
    show_labels: bool = True,
) -> Image.Image:
    """
    Draw the placed lines over a copy of the background image.

    Lines still in the home tray are skipped.

    Args:
        image: Background image (copied, not modified)
        views: Line views from InteractionController.line_views()
        color: Line and handle colour
        width: Line width in pixels
        show_labels: Draw the start/middle/end labels

    Returns:
        New image with the lines drawn
    """
    result = image.convert("RGB") if image.mode != "RGB" else image.copy()
    draw = ImageDraw.Draw(result)
    font = _load_font(DEFAULT_FONT_SIZE) if show_labels else None

    drawn = 0
    for view in views:
        if view.container is not Container.DROP:
            continue
        _draw_line(draw, view, color, width, font)
        drawn += 1

    logger.debug(f"Rendered {drawn} placed lines on {result.size[0]}x{result.size[1]} image")
    return result


def render_home_tray(
    views: Sequence[LineView],
    size: Tuple[int, int],
    *,
    color: str = DEFAULT_HOME_COLOR,
    width: int = DEFAULT_LINE_WIDTH,
    background: str = "white",
) -> Image.Image:
    """Draw the lines waiting in the home tray on a blank image of the tray's size."""
    tray = Image.new("RGB", size, color=background)
    draw = ImageDraw.Draw(tray)
    font = _load_font(DEFAULT_FONT_SIZE)
    for view in views:
        if view.container is Container.HOME:
            _draw_line(draw, view, color, width, font)
    return tray


def draw_zones(
    image: Image.Image,
    question: QuestionDefinition,
    *,
    color: str = DEFAULT_ZONE_COLOR,
) -> Image.Image:
    """
    Draw every line's target zones (circles of the zone tolerance) over a copy.

    Used for feedback, where the expected placement is shown.
    """
    result = image.convert("RGB") if image.mode != "RGB" else image.copy()
    draw = ImageDraw.Draw(result)
    for line in question.lines:
        for zone in (line.zone_start, line.zone_end):
            draw.ellipse(_circle_box(zone, zone.tolerance), outline=color, width=2)
    return result


def _draw_line(
    draw: ImageDraw.ImageDraw,
    view: LineView,
    color: str,
    width: int,
    font: Optional[ImageFont.ImageFont],
) -> None:
    points = view.points
    draw.line([(p.x, p.y) for p in points], fill=color, width=width)

    # Handles sit on the graded points (the inner pair for infinite lines).
    graded = points[1:3] if len(points) == 4 else points
    for point in graded:
        draw.ellipse(_circle_box(point, point.tolerance), outline=color, width=2)

    if font is None:
        return
    start, end = graded
    label_start, label_middle, label_end = view.labels
    middle = Coordinate((start.x + end.x) / 2, (start.y + end.y) / 2, 0)
    for text, anchor in ((label_start, start), (label_middle, middle), (label_end, end)):
        if text:
            draw.text((anchor.x, anchor.y + anchor.tolerance + 2), text, fill=color, font=font)


def _circle_box(centre: Coordinate, radius: float) -> Tuple[float, float, float, float]:
    return (centre.x - radius, centre.y - radius, centre.x + radius, centre.y + radius)


def _load_font(size: int) -> ImageFont.ImageFont:
    """
    Load a TrueType font for labels.

    Falls back to Pillow's default font if none is available.
    """
    font_options = [
        "arial.ttf",        # Arial (Windows)
        "Arial.ttf",        # Arial (Mac)
        "DejaVuSans.ttf",   # DejaVu Sans (Linux)
    ]

    for font_name in font_options:
        try:
            return ImageFont.truetype(font_name, size)
        except (IOError, OSError):
            continue

    logger.warning("Could not load TrueType font, using default")
    return ImageFont.load_default()

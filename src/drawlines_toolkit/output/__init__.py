"""
Module: output

Purpose:
    Pillow rendering of lines and zones for previews and feedback images.
"""

from .overlay import (
    ImageNotFoundError,
    background_size,
    draw_zones,
    render_home_tray,
    render_lines,
)

__all__ = [
    "ImageNotFoundError",
    "background_size",
    "draw_zones",
    "render_home_tray",
    "render_lines",
]

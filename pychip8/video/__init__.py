"""Video helpers for the CHIP-8 interpreter."""

from __future__ import annotations

from .font import FONT_DATA, FONT_SIZE, FONT_START_ADDRESS, GLYPH_BYTES, glyph, glyph_address
from .framebuffer import PIXEL_OFF, PIXEL_ON, SCREEN_HEIGHT, SCREEN_WIDTH, FrameBuffer, SpriteEdge
from .palette import MONOCHROME, parse_color, validate_palette
from .renderer import RenderResult, Renderer

__all__ = [
    "FONT_DATA",
    "FONT_SIZE",
    "FONT_START_ADDRESS",
    "GLYPH_BYTES",
    "glyph",
    "glyph_address",
    "FrameBuffer",
    "SpriteEdge",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "PIXEL_ON",
    "PIXEL_OFF",
    "MONOCHROME",
    "parse_color",
    "validate_palette",
    "Renderer",
    "RenderResult",
]

"""Convert the framebuffer into RGB frames and pygame surfaces."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from pychip8.utils import debug_enabled, debug_log

from .framebuffer import PIXEL_OFF, FrameBuffer
from .palette import MONOCHROME, RGBColor, validate_palette


@dataclass
class RenderResult:
    """Packed 24-bit RGB frame produced by :class:`Renderer`."""

    width: int
    height: int
    pixels: bytes

    def get_pixel(self, x: int, y: int) -> RGBColor:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} frame")
        offset = (y * self.width + x) * 3
        return (self.pixels[offset], self.pixels[offset + 1], self.pixels[offset + 2])

    def to_surface(self):
        import pygame  # type: ignore

        return pygame.image.frombuffer(self.pixels, (self.width, self.height), "RGB")


class Renderer:
    """Scale the 64x32 pixel mask up into an RGB image."""

    def __init__(self, palette: Sequence[RGBColor] = MONOCHROME) -> None:
        self._background, self._foreground = validate_palette(palette)

    def render(self, framebuffer: FrameBuffer, *, scale: int = 1) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")

        background = bytes(self._background) * scale
        foreground = bytes(self._foreground) * scale
        width = framebuffer.width * scale
        out = bytearray()
        for row in framebuffer.rows():
            line = b"".join(background if value == PIXEL_OFF else foreground for value in row)
            out += line * scale

        if debug_enabled("video"):
            debug_log("video", "render scale=%d lit=%d", scale, framebuffer.lit_pixels())
        return RenderResult(width, framebuffer.height * scale, bytes(out))

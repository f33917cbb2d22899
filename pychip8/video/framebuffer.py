"""Monochrome 64x32 framebuffer written by the CLS and DRW instructions."""

from __future__ import annotations

from enum import Enum, auto
from typing import Iterable

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32

PIXEL_OFF = 0x00
PIXEL_ON = 0xFF


class SpriteEdge(Enum):
    """What happens to sprite pixels that fall past the right or bottom edge."""

    CLIP = auto()
    WRAP = auto()


class FrameBuffer:
    """One byte per pixel, row-major, each byte either 0x00 or 0xFF."""

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("framebuffer dimensions must be positive")
        self.width = width
        self.height = height
        self._pixels = bytearray(width * height)

    def clear(self) -> None:
        self._pixels[:] = bytes(len(self._pixels))

    def get_pixel(self, x: int, y: int) -> int:
        return self._pixels[self._index(x, y)]

    def is_on(self, x: int, y: int) -> bool:
        return self._pixels[self._index(x, y)] != PIXEL_OFF

    def toggle(self, x: int, y: int) -> bool:
        """Flip one pixel and return True when an on pixel was switched off."""

        index = self._index(x, y)
        if self._pixels[index] != PIXEL_OFF:
            self._pixels[index] = PIXEL_OFF
            return True
        self._pixels[index] = PIXEL_ON
        return False

    def draw_sprite(
        self,
        x: int,
        y: int,
        rows: Iterable[int],
        edge: SpriteEdge = SpriteEdge.CLIP,
    ) -> bool:
        """XOR an 8-pixel-wide sprite onto the screen.

        ``x``/``y`` are reduced modulo the screen size before drawing. Returns
        True when at least one lit pixel was turned off.
        """

        origin_x = x % self.width
        origin_y = y % self.height
        collision = False
        for row, bits in enumerate(rows):
            py = origin_y + row
            if py >= self.height:
                if edge is SpriteEdge.CLIP:
                    break
                py %= self.height
            for col in range(8):
                if not bits & (0x80 >> col):
                    continue
                px = origin_x + col
                if px >= self.width:
                    if edge is SpriteEdge.CLIP:
                        break
                    px %= self.width
                if self.toggle(px, py):
                    collision = True
        return collision

    def lit_pixels(self) -> int:
        return sum(1 for value in self._pixels if value != PIXEL_OFF)

    def snapshot(self) -> bytes:
        return bytes(self._pixels)

    def load(self, data: bytes) -> None:
        if len(data) != len(self._pixels):
            raise ValueError(f"framebuffer snapshot must be {len(self._pixels)} bytes")
        self._pixels[:] = data

    def rows(self) -> Iterable[bytes]:
        for y in range(self.height):
            start = y * self.width
            yield bytes(self._pixels[start : start + self.width])

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} framebuffer")
        return y * self.width + x

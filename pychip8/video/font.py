"""Built-in 4x5 hexadecimal font for the CHIP-8 interpreter."""

from __future__ import annotations

FONT_START_ADDRESS = 0x050
GLYPH_BYTES = 5
GLYPH_COUNT = 16
FONT_SIZE = GLYPH_BYTES * GLYPH_COUNT

FONT_DATA = bytes(
    (
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    )
)


def glyph_address(digit: int) -> int:
    """Return the address of the glyph for ``digit``.

    No masking is applied: a digit above 0xF yields an address past the font,
    exactly as the ``LD F, Vx`` instruction computes it.
    """

    return FONT_START_ADDRESS + GLYPH_BYTES * digit


def glyph(digit: int) -> bytes:
    offset = (digit & 0x0F) * GLYPH_BYTES
    return FONT_DATA[offset : offset + GLYPH_BYTES]

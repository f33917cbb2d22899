"""Two-colour palettes used when turning the framebuffer into pixels."""

from __future__ import annotations

from typing import Sequence, Tuple

RGBColor = Tuple[int, int, int]
Palette = Tuple[RGBColor, RGBColor]


MONOCHROME: Palette = ((0x00, 0x00, 0x00), (0xFF, 0xFF, 0xFF))


def parse_color(text: str) -> RGBColor:
    """Parse ``#rrggbb`` (the leading ``#`` is optional) into an RGB tuple."""

    value = text.strip().lstrip("#")
    if len(value) != 6:
        raise ValueError(f"colour must be six hex digits: {text!r}")
    try:
        packed = int(value, 16)
    except ValueError as exc:
        raise ValueError(f"colour must be six hex digits: {text!r}") from exc
    return ((packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF)


def validate_palette(palette: Sequence[RGBColor]) -> Palette:
    """Return ``palette`` as a (background, foreground) pair of byte triples."""

    if len(palette) != 2:
        raise ValueError("palette must contain exactly two colours (background and foreground)")
    background, foreground = palette
    for color in (background, foreground):
        if len(color) != 3:
            raise ValueError("palette entries must be RGB tuples")
    return (
        (background[0] & 0xFF, background[1] & 0xFF, background[2] & 0xFF),
        (foreground[0] & 0xFF, foreground[1] & 0xFF, foreground[2] & 0xFF),
    )

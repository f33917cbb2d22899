"""Python CHIP-8 interpreter.

The execution engine lives in ``cpu`` and only depends on ``bus``, ``io`` and
``video``; ``ui`` wraps it in a pygame window.
"""

from __future__ import annotations

from . import bus, cpu, io, loader, system, ui, utils, video

__all__: list[str] = [
    "cpu",
    "bus",
    "video",
    "io",
    "loader",
    "system",
    "ui",
    "utils",
]

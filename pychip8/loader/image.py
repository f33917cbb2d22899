"""Raw program image loader.

CHIP-8 programs carry no header: the file is copied byte for byte into memory
starting at 0x200. The only validation is that it fits below 0x1000.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from pychip8.bus import MemorySystem
from pychip8.utils import debug_enabled, debug_log

from .program import ProgramImage

PROGRAM_START_ADDRESS = 0x200
MAX_PROGRAM_LENGTH = 0x1000 - PROGRAM_START_ADDRESS


class ProgramTooLargeError(RuntimeError):
    """Raised when an image does not fit between 0x200 and the end of memory."""


def load_program(stream: BinaryIO, memory: MemorySystem, *, name: str = "") -> ProgramImage:
    """Copy the contents of ``stream`` into ``memory`` and return metadata."""

    return load_program_bytes(stream.read(), memory, name=name)


def load_program_bytes(data: bytes, memory: MemorySystem, *, name: str = "") -> ProgramImage:
    capacity = min(MAX_PROGRAM_LENGTH, memory.size - PROGRAM_START_ADDRESS)
    if len(data) > capacity:
        raise ProgramTooLargeError(
            f"program image is {len(data)} bytes; at most {capacity} bytes fit at {PROGRAM_START_ADDRESS:#05x}"
        )

    for offset, value in enumerate(data):
        memory.store8(PROGRAM_START_ADDRESS + offset, value)

    if debug_enabled("loader"):
        debug_log("loader", "loaded name=%s length=%d", name or "-", len(data))
    return ProgramImage(name=name, start=PROGRAM_START_ADDRESS, length=len(data))


def load_program_from_path(path: Path, memory: MemorySystem) -> ProgramImage:
    """Load a program image from the filesystem."""

    with path.open("rb") as handle:
        return load_program(handle, memory, name=path.name)

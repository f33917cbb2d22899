"""Loaders for CHIP-8 program images."""

from __future__ import annotations

from .image import (
    MAX_PROGRAM_LENGTH,
    PROGRAM_START_ADDRESS,
    ProgramTooLargeError,
    load_program,
    load_program_bytes,
    load_program_from_path,
)
from .program import ProgramImage

__all__ = [
    "MAX_PROGRAM_LENGTH",
    "PROGRAM_START_ADDRESS",
    "ProgramImage",
    "ProgramTooLargeError",
    "load_program",
    "load_program_bytes",
    "load_program_from_path",
]

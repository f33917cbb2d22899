"""Bus-related helpers for the CHIP-8 interpreter."""

from .memory import (
    ADDRESS_SPACE_SIZE,
    Addressable,
    Memory,
    MemoryError,
    MemorySystem,
    ReadOnlyMemory,
)

__all__ = [
    "ADDRESS_SPACE_SIZE",
    "Addressable",
    "Memory",
    "MemorySystem",
    "MemoryError",
    "ReadOnlyMemory",
]

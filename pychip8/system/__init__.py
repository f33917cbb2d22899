"""CHIP-8 system assembly helpers."""

from __future__ import annotations

from .machine import MEMORY_SIZE, FontRom, InterpreterRam, Machine, MachineConfig, ProgramRam, create_machine
from .timing import CycleGate

__all__ = [
    "MEMORY_SIZE",
    "MachineConfig",
    "Machine",
    "InterpreterRam",
    "FontRom",
    "ProgramRam",
    "create_machine",
    "CycleGate",
]

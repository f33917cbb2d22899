"""CPU package for the CHIP-8 interpreter."""

from .core import (
    FLAG_REGISTER,
    PROGRAM_START,
    STACK_DEPTH,
    Chip8CPU,
    CPUError,
    CPUState,
    IllegalOpcodeError,
    StackOverflowError,
    StackUnderflowError,
)
from . import opcodes

__all__ = [
    "Chip8CPU",
    "CPUState",
    "CPUError",
    "IllegalOpcodeError",
    "StackOverflowError",
    "StackUnderflowError",
    "FLAG_REGISTER",
    "PROGRAM_START",
    "STACK_DEPTH",
    "opcodes",
]

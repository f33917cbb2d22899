"""Instruction table for the CHIP-8 interpreter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterable, List, Sequence


@dataclass(frozen=True)
class Operands:
    """Nibble fields extracted from a 16-bit instruction word."""

    x: int
    y: int
    n: int
    nn: int
    nnn: int


def decode_operands(word: int) -> Operands:
    return Operands(
        x=(word >> 8) & 0x0F,
        y=(word >> 4) & 0x0F,
        n=word & 0x000F,
        nn=word & 0x00FF,
        nnn=word & 0x0FFF,
    )


@dataclass(frozen=True)
class Instruction:
    """A CHIP-8 instruction matched by ``word & mask == pattern``."""

    pattern: int
    mask: int
    mnemonic: str
    handler: str

    def __post_init__(self) -> None:
        if not 0 <= self.pattern <= 0xFFFF or not 0 <= self.mask <= 0xFFFF:
            raise ValueError(f"pattern/mask out of range: {self.pattern:#x}/{self.mask:#x}")
        if self.mask & 0xF000 != 0xF000:
            raise ValueError("mask must cover the group nibble")
        if self.pattern & ~self.mask:
            raise ValueError(f"pattern {self.pattern:#06x} has bits outside mask {self.mask:#06x}")

    @property
    def group(self) -> int:
        return (self.pattern >> 12) & 0x0F

    def matches(self, word: int) -> bool:
        return (word & self.mask) == self.pattern


class OpcodeTable:
    """Builder that sorts instructions into the sixteen top-nibble groups."""

    _GROUP_COUNT: Final[int] = 0x10

    def __init__(self) -> None:
        self._groups: List[List[Instruction]] = [[] for _ in range(self._GROUP_COUNT)]

    def register(self, instruction: Instruction) -> None:
        bucket = self._groups[instruction.group]
        for existing in bucket:
            common = existing.mask & instruction.mask
            if (existing.pattern & common) == (instruction.pattern & common):
                raise ValueError(
                    f"pattern {instruction.pattern:#06x} overlaps {existing.mnemonic} ({existing.pattern:#06x})"
                )
        bucket.append(instruction)

    def register_all(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.register(instruction)

    def freeze(self) -> Sequence[Sequence[Instruction]]:
        return tuple(tuple(bucket) for bucket in self._groups)


def build_instruction_table(instructions: Iterable[Instruction]) -> Sequence[Sequence[Instruction]]:
    """Build the group-indexed lookup table used by :func:`lookup`."""

    table = OpcodeTable()
    table.register_all(instructions)
    return table.freeze()


DEFAULT_INSTRUCTIONS: Sequence[Instruction] = (
    Instruction(0x00E0, 0xFFFF, "CLS", "op_cls"),
    Instruction(0x00EE, 0xFFFF, "RET", "op_ret"),
    Instruction(0x1000, 0xF000, "JP", "op_jp"),
    Instruction(0x2000, 0xF000, "CALL", "op_call"),
    Instruction(0x3000, 0xF000, "SE", "op_se_byte"),
    Instruction(0x4000, 0xF000, "SNE", "op_sne_byte"),
    Instruction(0x5000, 0xF00F, "SE", "op_se_reg"),
    Instruction(0x6000, 0xF000, "LD", "op_ld_byte"),
    Instruction(0x7000, 0xF000, "ADD", "op_add_byte"),
    # 8XYn register/register ALU
    Instruction(0x8000, 0xF00F, "LD", "op_ld_reg"),
    Instruction(0x8001, 0xF00F, "OR", "op_or"),
    Instruction(0x8002, 0xF00F, "AND", "op_and"),
    Instruction(0x8003, 0xF00F, "XOR", "op_xor"),
    Instruction(0x8004, 0xF00F, "ADD", "op_add_reg"),
    Instruction(0x8005, 0xF00F, "SUB", "op_sub"),
    Instruction(0x8006, 0xF00F, "SHR", "op_shr"),
    Instruction(0x8007, 0xF00F, "SUBN", "op_subn"),
    Instruction(0x800E, 0xF00F, "SHL", "op_shl"),
    Instruction(0x9000, 0xF00F, "SNE", "op_sne_reg"),
    Instruction(0xA000, 0xF000, "LD", "op_ld_index"),
    Instruction(0xB000, 0xF000, "JP", "op_jp_v0"),
    Instruction(0xC000, 0xF000, "RND", "op_rnd"),
    Instruction(0xD000, 0xF000, "DRW", "op_drw"),
    # Keypad
    Instruction(0xE09E, 0xF0FF, "SKP", "op_skp"),
    Instruction(0xE0A1, 0xF0FF, "SKNP", "op_sknp"),
    # Timers, index register and memory transfers
    Instruction(0xF007, 0xF0FF, "LD", "op_ld_reg_dt"),
    Instruction(0xF00A, 0xF0FF, "LD", "op_ld_key"),
    Instruction(0xF015, 0xF0FF, "LD", "op_ld_dt_reg"),
    Instruction(0xF018, 0xF0FF, "LD", "op_ld_st_reg"),
    Instruction(0xF01E, 0xF0FF, "ADD", "op_add_index"),
    Instruction(0xF029, 0xF0FF, "LD", "op_ld_font"),
    Instruction(0xF033, 0xF0FF, "LD", "op_ld_bcd"),
    Instruction(0xF055, 0xF0FF, "LD", "op_store_regs"),
    Instruction(0xF065, 0xF0FF, "LD", "op_load_regs"),
)


INSTRUCTION_TABLE: Sequence[Sequence[Instruction]] = build_instruction_table(DEFAULT_INSTRUCTIONS)


def lookup(word: int, table: Sequence[Sequence[Instruction]] = INSTRUCTION_TABLE) -> Instruction | None:
    """Return the instruction matching ``word``, or None for an unknown word."""

    word &= 0xFFFF
    for instruction in table[(word >> 12) & 0x0F]:
        if instruction.matches(word):
            return instruction
    return None

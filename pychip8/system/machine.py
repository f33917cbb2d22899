"""CHIP-8 machine assembly and memory map."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from pychip8.bus import Memory, MemorySystem, ReadOnlyMemory
from pychip8.cpu import Chip8CPU
from pychip8.io import Keypad
from pychip8.loader import PROGRAM_START_ADDRESS, ProgramImage, load_program_bytes
from pychip8.video import FONT_DATA, FONT_SIZE, FONT_START_ADDRESS, FrameBuffer, SpriteEdge

MEMORY_SIZE = 0x1000


@dataclass
class MachineConfig:
    """Runtime configuration for the CHIP-8 machine."""

    sprite_edge: SpriteEdge = SpriteEdge.CLIP
    rng_seed: Optional[int] = None
    program_image: Optional[bytes] = None
    program_name: str = ""


class InterpreterRam(Memory):
    """0x000-0x1FF, historically occupied by the interpreter itself."""


class FontRom(ReadOnlyMemory):
    """Hex digit glyphs, fixed after power-on."""


class ProgramRam(Memory):
    """0x200-0xFFF, where program images are loaded."""


@dataclass
class Machine:
    """Aggregates the core components of the CHIP-8."""

    memory: MemorySystem
    cpu: Chip8CPU
    interpreter_ram: InterpreterRam
    font_rom: FontRom
    program_ram: ProgramRam
    framebuffer: FrameBuffer
    keypad: Keypad
    program: ProgramImage | None = None
    _program_data: bytes = field(default=b"", repr=False)

    def step(self) -> int:
        """Advance the interpreter by one cycle."""

        return self.cpu.step()

    def run(self, cycles: int) -> None:
        for _ in range(cycles):
            self.cpu.step()

    def load_program(self, data: bytes, name: str = "") -> ProgramImage:
        self.program = load_program_bytes(data, self.memory, name=name)
        self._program_data = bytes(data)
        return self.program

    def load_program_from_path(self, path: Path) -> ProgramImage:
        return self.load_program(path.read_bytes(), name=path.name)

    def reset(self) -> None:
        """Restore the power-on state, reloading the current program."""

        self.interpreter_ram.clear()
        self.program_ram.clear()
        self.framebuffer.clear()
        self.keypad.reset()
        self.cpu.reset()
        if self.program is not None:
            load_program_bytes(self._program_data, self.memory, name=self.program.name)


def create_machine(config: MachineConfig | None = None) -> Machine:
    """Instantiate a CHIP-8 machine with the requested configuration."""

    config = config or MachineConfig()

    memory = MemorySystem()
    memory.allocate_space(MEMORY_SIZE)

    interpreter_ram = InterpreterRam(0x000, PROGRAM_START_ADDRESS)
    memory.register_memory(interpreter_ram)

    # Registered after the interpreter area so it takes over 0x050-0x09F.
    font_rom = FontRom(FONT_START_ADDRESS, FONT_SIZE)
    font_rom.load_image(FONT_DATA)
    memory.register_memory(font_rom)

    program_ram = ProgramRam(PROGRAM_START_ADDRESS, MEMORY_SIZE - PROGRAM_START_ADDRESS)
    memory.register_memory(program_ram)

    framebuffer = FrameBuffer()
    keypad = Keypad()
    cpu = Chip8CPU(
        memory,
        framebuffer=framebuffer,
        keypad=keypad,
        sprite_edge=config.sprite_edge,
        rng=random.Random(config.rng_seed),
    )
    cpu.reset()

    machine = Machine(
        memory=memory,
        cpu=cpu,
        interpreter_ram=interpreter_ram,
        font_rom=font_rom,
        program_ram=program_ram,
        framebuffer=framebuffer,
        keypad=keypad,
    )
    if config.program_image is not None:
        machine.load_program(config.program_image, config.program_name)
    return machine

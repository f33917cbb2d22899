"""Tests for machine assembly and the CHIP-8 memory map."""

from __future__ import annotations

import pytest

from pychip8.bus import MemoryError
from pychip8.cpu import PROGRAM_START
from pychip8.system import FontRom, InterpreterRam, MachineConfig, ProgramRam, create_machine
from pychip8.video import FONT_DATA, FONT_START_ADDRESS


def test_memory_map_layout() -> None:
    machine = create_machine()
    memory = machine.memory

    assert memory.size == 0x1000
    assert memory.get_memory(InterpreterRam) is machine.interpreter_ram
    assert memory.get_memory(FontRom) is machine.font_rom
    assert memory.get_memory(ProgramRam) is machine.program_ram
    assert memory.get_start_address(InterpreterRam) == 0x000
    assert memory.get_end_address(InterpreterRam) == 0x1FF
    assert memory.get_start_address(FontRom) == 0x050
    assert memory.get_end_address(FontRom) == 0x09F
    assert memory.get_start_address(ProgramRam) == 0x200
    assert memory.get_end_address(ProgramRam) == 0xFFF


def test_power_on_state() -> None:
    machine = create_machine()

    assert bytes(machine.memory.load8(FONT_START_ADDRESS + i) for i in range(80)) == FONT_DATA
    assert machine.memory.load8(0x000) == 0
    assert machine.memory.load8(0x200) == 0
    assert machine.cpu.state.pc == PROGRAM_START
    assert machine.framebuffer.lit_pixels() == 0
    assert machine.keypad.pressed_keys() == ()
    assert machine.program is None


def test_font_rom_rejects_writes() -> None:
    machine = create_machine()

    with pytest.raises(MemoryError):
        machine.memory.store8(0x050, 0x00)
    assert machine.memory.load8(0x050) == 0xF0


def test_interpreter_area_outside_font_is_writable() -> None:
    machine = create_machine()
    machine.memory.store8(0x0A0, 0x42)
    assert machine.memory.load8(0x0A0) == 0x42


def test_config_program_image_is_loaded() -> None:
    machine = create_machine(MachineConfig(program_image=b"\x6A\x05", program_name="demo"))

    assert machine.program is not None
    assert machine.program.name == "demo"
    assert machine.program.length == 2
    assert machine.memory.load16(0x200) == 0x6A05


def test_step_returns_executed_opcode() -> None:
    machine = create_machine(MachineConfig(program_image=b"\x6A\x05\x7A\x03"))

    assert machine.step() == 0x6A05
    assert machine.step() == 0x7A03
    assert machine.cpu.state.v[0xA] == 0x08
    assert machine.cpu.cycle_count == 2


def test_reset_restores_power_on_state_and_program() -> None:
    machine = create_machine(MachineConfig(program_image=b"\xA0\x50\xD0\x05\x60\x09\xF0\x15"))
    machine.run(4)
    machine.memory.store8(0x300, 0x77)
    machine.memory.store8(0x202, 0x00)
    machine.keypad.press(0x3)

    machine.reset()

    state = machine.cpu.state
    assert state.pc == PROGRAM_START
    assert state.i == 0
    assert state.delay_timer == 0
    assert bytes(state.v) == bytes(16)
    assert machine.framebuffer.lit_pixels() == 0
    assert machine.keypad.pressed_keys() == ()
    assert machine.memory.load8(0x300) == 0x00
    assert machine.memory.load16(0x202) == 0xD005
    assert machine.memory.load8(0x050) == 0xF0


def test_same_seed_gives_same_random_sequence() -> None:
    program = b"".join(word.to_bytes(2, "big") for word in (0xC0FF, 0xC1FF, 0xC2FF))
    first = create_machine(MachineConfig(program_image=program, rng_seed=1234))
    second = create_machine(MachineConfig(program_image=program, rng_seed=1234))

    first.run(3)
    second.run(3)

    assert bytes(first.cpu.state.v[:3]) == bytes(second.cpu.state.v[:3])


def test_load_program_from_path(tmp_path) -> None:
    rom_path = tmp_path / "ibm.ch8"
    rom_path.write_bytes(b"\x00\xE0")
    machine = create_machine()

    image = machine.load_program_from_path(rom_path)

    assert image.name == "ibm.ch8"
    assert machine.program is image
    assert machine.memory.load16(0x200) == 0x00E0

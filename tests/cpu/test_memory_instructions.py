"""Index register and memory transfer instructions (ANNN, FX1E, FX29, FX33, FX55, FX65)."""

from __future__ import annotations

import pytest

from pychip8.bus import MemoryError
from pychip8.system import Machine, MachineConfig, create_machine


def make_machine(*words: int) -> Machine:
    program = b"".join(word.to_bytes(2, "big") for word in words)
    return create_machine(MachineConfig(program_image=program))


def read_block(machine: Machine, start: int, length: int) -> list[int]:
    return [machine.memory.load8(start + offset) for offset in range(length)]


def test_load_index() -> None:
    machine = make_machine(0xA123)
    machine.step()
    assert machine.cpu.state.i == 0x123


@pytest.mark.parametrize(
    ("value", "digits"),
    [
        (255, [2, 5, 5]),
        (0, [0, 0, 0]),
        (7, [0, 0, 7]),
        (120, [1, 2, 0]),
        (99, [0, 9, 9]),
    ],
)
def test_binary_coded_decimal(value: int, digits: list[int]) -> None:
    machine = make_machine(0x6000 | value, 0xA300, 0xF033)
    machine.run(3)

    assert read_block(machine, 0x300, 3) == digits
    assert machine.cpu.state.i == 0x300


def test_store_registers_through_vx_inclusive() -> None:
    machine = make_machine(0x6011, 0x6122, 0x6233, 0x6344, 0x6455, 0xA400, 0xF355)
    machine.run(7)

    assert read_block(machine, 0x400, 5) == [0x11, 0x22, 0x33, 0x44, 0x00]
    assert machine.cpu.state.i == 0x400


def test_load_registers_through_vx_inclusive() -> None:
    machine = make_machine(0x6399, 0x62FF, 0xA400, 0xF265)
    for offset, value in enumerate((0x0A, 0x0B, 0x0C, 0x0D)):
        machine.memory.store8(0x400 + offset, value)

    machine.run(4)

    v = machine.cpu.state.v
    assert list(v[:3]) == [0x0A, 0x0B, 0x0C]
    assert v[3] == 0x99
    assert machine.cpu.state.i == 0x400


def test_add_to_index() -> None:
    machine = make_machine(0xA100, 0x6520, 0xF51E)
    machine.run(3)
    assert machine.cpu.state.i == 0x120


def test_add_to_index_is_not_clamped_to_memory() -> None:
    machine = make_machine(0xAFFF, 0x60FF, 0xF01E, 0xF055)
    machine.run(3)
    assert machine.cpu.state.i == 0x10FE

    with pytest.raises(MemoryError):
        machine.step()


@pytest.mark.parametrize(("digit", "address"), [(0x0, 0x050), (0x1, 0x055), (0xA, 0x082), (0xF, 0x09B)])
def test_font_glyph_address(digit: int, address: int) -> None:
    machine = make_machine(0x6700 | digit, 0xF729)
    machine.run(2)
    assert machine.cpu.state.i == address


def test_writing_into_font_raises() -> None:
    machine = make_machine(0x60FF, 0xA050, 0xF033)
    machine.run(2)

    with pytest.raises(MemoryError):
        machine.step()
    assert machine.memory.load8(0x050) == 0xF0


def test_store_registers_past_end_of_memory_raises() -> None:
    machine = make_machine(0xAFFE, 0xF255)
    machine.step()
    with pytest.raises(MemoryError):
        machine.step()


def test_program_can_modify_itself() -> None:
    # Store V0 over the next instruction, turning it into 0x6A42 (LD VA, 0x42).
    machine = make_machine(0x606A, 0x6142, 0xA208, 0xF155, 0x0000)
    machine.run(5)
    assert machine.cpu.state.v[0xA] == 0x42

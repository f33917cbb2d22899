"""Integration tests running small hand-assembled programs end to end."""

from __future__ import annotations

from pychip8.system import Machine, MachineConfig, create_machine

KEY_ECHO = (
    0xF00A,  # LD V0, K
    0xF029,  # LD F, V0
    0x6105,  # LD V1, 5
    0xD115,  # DRW V1, V1, 5
    0x1208,  # JP 0x208
)

DELAY_LOOP = (
    0x6010,  # LD V0, 16
    0xF015,  # LD DT, V0
    0xF107,  # LD V1, DT
    0x3100,  # SE V1, 0
    0x1204,  # JP 0x204
    0x120A,  # JP 0x20A
)


def boot(words: tuple[int, ...]) -> Machine:
    program = b"".join(word.to_bytes(2, "big") for word in words)
    return create_machine(MachineConfig(program_image=program, program_name="sample"))


def run_until(machine: Machine, pc: int, limit: int = 1000) -> int:
    for executed in range(limit):
        if machine.cpu.state.pc == pc:
            return executed
        machine.step()
    raise AssertionError(f"pc never reached {pc:#05x}")


def test_key_echo_waits_then_draws_pressed_digit() -> None:
    machine = boot(KEY_ECHO)

    machine.run(10)
    assert machine.cpu.state.pc == 0x200
    assert machine.framebuffer.lit_pixels() == 0

    machine.keypad.press_key("x")
    machine.run(4)

    assert machine.cpu.state.v[0] == 0x0
    assert machine.cpu.state.i == 0x050
    assert machine.framebuffer.lit_pixels() == 14
    assert machine.framebuffer.is_on(5, 5)
    assert not machine.framebuffer.is_on(6, 6)

    machine.run(50)
    assert machine.cpu.state.pc == 0x208
    assert machine.framebuffer.lit_pixels() == 14


def test_delay_timer_loop_runs_out() -> None:
    machine = boot(DELAY_LOOP)

    executed = run_until(machine, 0x20A)

    assert machine.cpu.state.delay_timer == 0
    assert machine.cpu.state.v[1] == 0
    assert 16 <= executed <= 60

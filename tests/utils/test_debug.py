from __future__ import annotations

import pytest

from pychip8.utils import debug_enabled, debug_log, reload_categories
from pychip8.utils.debug import ENV_VARIABLE


@pytest.fixture
def debug_env(monkeypatch):
    def apply(value: str | None) -> None:
        if value is None:
            monkeypatch.delenv(ENV_VARIABLE, raising=False)
        else:
            monkeypatch.setenv(ENV_VARIABLE, value)
        reload_categories()

    yield apply
    monkeypatch.delenv(ENV_VARIABLE, raising=False)
    reload_categories()


def test_disabled_by_default(debug_env, capsys) -> None:
    debug_env(None)

    assert not debug_enabled()
    assert not debug_enabled("cpu")
    debug_log("cpu", "pc=%03X", 0x200)
    assert capsys.readouterr().out == ""


def test_selected_categories(debug_env, capsys) -> None:
    debug_env("CPU, loader")

    assert debug_enabled("cpu")
    assert debug_enabled("loader")
    assert not debug_enabled("video")
    assert debug_enabled()

    debug_log("cpu", "pc=%03X opcode=%04X", 0x200, 0x6A05)
    debug_log("video", "ignored")
    assert capsys.readouterr().out == "[CHIP8][cpu] pc=200 opcode=6A05\n"


def test_all_enables_every_category(debug_env) -> None:
    debug_env("all")
    assert debug_enabled("timing")
    assert debug_enabled("input")


def test_bad_format_arguments_are_still_logged(debug_env, capsys) -> None:
    debug_env("cpu")

    debug_log("cpu", "value=%d", "text")
    assert capsys.readouterr().out == "[CHIP8][cpu] value=%d ('text',)\n"


def test_cpu_steps_are_logged(debug_env, capsys) -> None:
    from pychip8.system import MachineConfig, create_machine

    debug_env("cpu")
    machine = create_machine(MachineConfig(program_image=b"\x6A\x05"))
    machine.step()

    out = capsys.readouterr().out
    assert out.startswith("[CHIP8][cpu]")
    assert "opcode=6a05" in out

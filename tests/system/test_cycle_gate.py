from __future__ import annotations

import pytest

from pychip8.system import CycleGate


def test_first_call_only_starts_the_clock() -> None:
    gate = CycleGate(2.0)

    assert gate.cycles_due(100) == 0
    assert gate.cycles_due(101) == 0
    assert gate.cycles_due(102) == 1


def test_releases_one_cycle_per_interval() -> None:
    gate = CycleGate(1.0)
    gate.start(0)

    assert gate.cycles_due(16) == 16
    assert gate.cycles_due(16) == 0
    assert gate.cycles_due(33) == 17


def test_fractional_remainder_carries_over() -> None:
    gate = CycleGate(3.0)
    gate.start(0)

    assert gate.cycles_due(5) == 1
    assert gate.cycles_due(6) == 1


def test_backlog_is_capped_per_call() -> None:
    gate = CycleGate(1.0, max_cycles=10)
    gate.start(0)

    assert gate.cycles_due(500) == 10
    assert gate.cycles_due(501) == 1


@pytest.mark.parametrize(("interval", "max_cycles"), [(0, 10), (-1.0, 10), (1.0, 0)])
def test_rejects_non_positive_settings(interval: float, max_cycles: int) -> None:
    with pytest.raises(ValueError):
        CycleGate(interval, max_cycles=max_cycles)

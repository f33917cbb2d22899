"""Elapsed-time gate deciding how many cycles the driver owes the CPU."""

from __future__ import annotations

from pychip8.utils import debug_enabled, debug_log


class CycleGate:
    """Release one cycle per elapsed ``interval_ms``.

    Time is supplied by the caller in milliseconds so the gate can be driven
    by ``pygame.time.get_ticks`` or by a test. Owed cycles beyond
    ``max_cycles`` per call are dropped rather than carried into the next
    frame, so a stalled window does not cause a burst afterwards.
    """

    def __init__(self, interval_ms: float = 1.0, *, max_cycles: int = 1000) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        if max_cycles <= 0:
            raise ValueError("max_cycles must be positive")
        self.interval_ms = float(interval_ms)
        self.max_cycles = max_cycles
        self._last: float | None = None

    def start(self, now_ms: float) -> None:
        self._last = float(now_ms)

    def cycles_due(self, now_ms: float) -> int:
        if self._last is None:
            self._last = float(now_ms)
            return 0

        elapsed = now_ms - self._last
        if elapsed < self.interval_ms:
            return 0

        due = int(elapsed // self.interval_ms)
        self._last += due * self.interval_ms
        if due > self.max_cycles:
            if debug_enabled("timing"):
                debug_log("timing", "dropped=%d cycles elapsed_ms=%.1f", due - self.max_cycles, elapsed)
            due = self.max_cycles
        return due

"""CHIP-8 hexadecimal keypad state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Mapping

from pychip8.utils import debug_enabled, debug_log

KEY_COUNT = 16

# Host keys laid out as the COSMAC VIP keypad:
#   1 2 3 C        1 2 3 4
#   4 5 6 D   <-   q w e r
#   7 8 9 E        a s d f
#   A 0 B F        z x c v
KEY_MAP: Mapping[str, int] = {
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}


ALIAS_TABLE: Mapping[str, str] = {
    "[1]": "1",
    "[2]": "2",
    "[3]": "3",
    "[4]": "4",
}


@dataclass
class Keypad:
    """Sixteen key flags written by the host and read by the interpreter."""

    _keys: list[bool] = field(default_factory=lambda: [False] * KEY_COUNT)
    _listeners: list[Callable[[int, bool], None]] = field(default_factory=list)

    def press(self, index: int) -> None:
        self._set(index, True)

    def release(self, index: int) -> None:
        self._set(index, False)

    def is_pressed(self, index: int) -> bool:
        self._check_index(index)
        return self._keys[index]

    def pressed_keys(self) -> tuple[int, ...]:
        return tuple(index for index, down in enumerate(self._keys) if down)

    def press_key(self, key_name: str) -> bool:
        """Press the keypad key bound to a host key name; False if unbound."""

        index = self._lookup(key_name)
        if index is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_press=%s", key_name)
            return False
        self.press(index)
        return True

    def release_key(self, key_name: str) -> bool:
        index = self._lookup(key_name)
        if index is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_release=%s", key_name)
            return False
        self.release(index)
        return True

    def reset(self) -> None:
        for index in range(KEY_COUNT):
            self._keys[index] = False

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(self._keys)

    def add_listener(self, listener: Callable[[int, bool], None]) -> None:
        self._listeners.append(listener)

    def _set(self, index: int, pressed: bool) -> None:
        self._check_index(index)
        before = self._keys[index]
        self._keys[index] = pressed
        if debug_enabled("input"):
            debug_log("input", "key=%X pressed=%s", index, pressed)
        if before != pressed:
            for listener in tuple(self._listeners):
                listener(index, pressed)

    @staticmethod
    def _check_index(index: int) -> None:
        if not 0 <= index < KEY_COUNT:
            raise IndexError(f"keypad index {index} out of range (0x0-0xF)")

    @staticmethod
    def _lookup(key_name: str) -> int | None:
        name = key_name.lower()
        name = ALIAS_TABLE.get(name, name)
        return KEY_MAP.get(name)

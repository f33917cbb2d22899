"""Memory system for the CHIP-8 interpreter.

The 4 KiB address space is split into regions that are mapped into a
``MemorySystem``: the interpreter area (0x000-0x1FF), the built-in font which
lives inside it and is read-only once loaded, and the program area starting at
0x200. Every access is bounds checked; there is no address wrap-around.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Type, TypeVar

ADDRESS_SPACE_SIZE = 0x1000


class MemoryError(Exception):
    """Raised on out-of-bounds access or a write to read-only memory."""


class Addressable:
    """A contiguous block of the address space starting at ``start``."""

    start: int
    length: int

    def get_start_address(self) -> int:
        return self.start

    def get_end_address(self) -> int:
        return self.start + self.length - 1

    def contains(self, address: int) -> bool:
        return self.start <= address < self.start + self.length

    def load8(self, address: int) -> int:  # pragma: no cover - interface
        raise NotImplementedError

    def store8(self, address: int, value: int) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def load16(self, address: int) -> int:
        return (self.load8(address) << 8) | self.load8(address + 1)

    def store16(self, address: int, value: int) -> None:
        for offset, byte in enumerate((value & 0xFFFF).to_bytes(2, "big")):
            self.store8(address + offset, byte)


@dataclass
class Memory(Addressable):
    """Byte-addressable RAM block."""

    start: int
    length: int
    _data: bytearray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.start < 0 or self.length <= 0:
            raise MemoryError(f"invalid region start={self.start:#05x} length={self.length}")
        self._data = bytearray(self.length)

    def load8(self, address: int) -> int:
        return self._data[self._locate(address)]

    def store8(self, address: int, value: int) -> None:
        self._data[self._locate(address)] = value & 0xFF

    def load_image(self, data: bytes, offset: int = 0) -> None:
        """Copy ``data`` into the block, ``offset`` bytes past its start."""

        end = offset + len(data)
        if offset < 0 or end > self.length:
            raise MemoryError(f"{len(data)} byte image at offset {offset:#05x} overruns region {self.start:#05x}")
        self._data[offset:end] = data

    def clear(self) -> None:
        self._data = bytearray(self.length)

    def snapshot(self) -> bytes:
        return bytes(self._data)

    def _locate(self, address: int) -> int:
        if not self.contains(address):
            raise MemoryError(f"address {address:#05x} outside region {self.start:#05x}-{self.get_end_address():#05x}")
        return address - self.start


class ReadOnlyMemory(Memory):
    """Block filled once through ``load_image`` and never written again."""

    def store8(self, address: int, value: int) -> None:
        raise MemoryError(f"write of {value & 0xFF:#04x} to read-only address {address:#05x}")

    def clear(self) -> None:
        raise MemoryError(f"read-only region {self.start:#05x} cannot be cleared")


T_Addressable = TypeVar("T_Addressable", bound=Addressable)


class MemorySystem:
    """Flat address space that routes each byte to the region mapped there.

    Regions registered later take over the slots of earlier ones, which is how
    the font ROM is laid over the interpreter area.
    """

    def __init__(self) -> None:
        self._slots: Optional[list[Optional[Addressable]]] = None
        self._by_type: Dict[Type[Addressable], Addressable] = {}

    @property
    def size(self) -> int:
        return len(self._mapped())

    def allocate_space(self, capacity: int = ADDRESS_SPACE_SIZE) -> None:
        if not 0 < capacity <= 0x10000:
            raise MemoryError(f"capacity {capacity} out of range (1-65536)")
        self._slots = [None] * capacity
        self._by_type.clear()

    def register_memory(self, memory: Addressable) -> None:
        slots = self._mapped()
        first = memory.get_start_address()
        last = memory.get_end_address()
        if first < 0 or last < first or last >= len(slots):
            raise MemoryError(f"region {first:#05x}-{last:#05x} does not fit in {len(slots)} bytes")
        slots[first : last + 1] = [memory] * (last - first + 1)
        self._by_type[type(memory)] = memory

    def get_memory(self, cls: Type[T_Addressable]) -> T_Addressable | None:
        return self._by_type.get(cls)  # type: ignore[return-value]

    def get_start_address(self, cls: Type[T_Addressable]) -> int:
        return self._registered(cls).get_start_address()

    def get_end_address(self, cls: Type[T_Addressable]) -> int:
        return self._registered(cls).get_end_address()

    def load8(self, address: int) -> int:
        return self._route(address).load8(address) & 0xFF

    def store8(self, address: int, value: int) -> None:
        self._route(address).store8(address, value)

    def load16(self, address: int) -> int:
        """Big-endian read; both bytes must be mapped."""

        return (self.load8(address) << 8) | self.load8(address + 1)

    def store16(self, address: int, value: int) -> None:
        self.store8(address, (value >> 8) & 0xFF)
        self.store8(address + 1, value & 0xFF)

    def _registered(self, cls: Type[T_Addressable]) -> T_Addressable:
        memory = self.get_memory(cls)
        if memory is None:
            raise MemoryError(f"memory {cls.__name__} not registered")
        return memory

    def _route(self, address: int) -> Addressable:
        slots = self._mapped()
        if not 0 <= address < len(slots):
            raise MemoryError(f"address {address:#06x} outside address space (0x000-{len(slots) - 1:#05x})")
        memory = slots[address]
        if memory is None:
            raise MemoryError(f"address {address:#05x} is not mapped")
        return memory

    def _mapped(self) -> list[Optional[Addressable]]:
        if self._slots is None:
            raise MemoryError("memory space not allocated")
        return self._slots

"""Program metadata returned by the loader."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ProgramImage:
    """Describes a program image that has been copied into memory."""

    name: str = ""
    start: int = 0x200
    length: int = 0

    @property
    def end(self) -> int:
        """Last address written, or ``start - 1`` for an empty image."""

        return self.start + self.length - 1

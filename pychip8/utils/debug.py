"""Debug logging switched on per category through ``CHIP8_DEBUG``.

``CHIP8_DEBUG=cpu,video`` prints only those categories and ``all`` prints
everything. The interpreter logs under ``cpu``, ``input``, ``loader``,
``timing`` and ``video``.
"""

from __future__ import annotations

import os

ENV_VARIABLE = "CHIP8_DEBUG"
ALL_CATEGORIES = "all"

_enabled: frozenset[str] | None = None


def _parse(value: str) -> frozenset[str]:
    return frozenset(part for part in (item.strip().lower() for item in value.split(",")) if part)


def _categories() -> frozenset[str]:
    global _enabled
    if _enabled is None:
        _enabled = _parse(os.environ.get(ENV_VARIABLE, ""))
    return _enabled


def reload_categories() -> frozenset[str]:
    """Re-read the environment; the value is otherwise cached on first use."""

    global _enabled
    _enabled = None
    return _categories()


def debug_enabled(category: str | None = None) -> bool:
    categories = _categories()
    if category is None or ALL_CATEGORIES in categories:
        return bool(categories)
    return category.lower() in categories


def debug_log(category: str, message: str, *args) -> None:
    if not debug_enabled(category):
        return
    if args:
        try:
            message = message % args
        except (TypeError, ValueError):
            message = f"{message} {args!r}"
    print(f"[CHIP8][{category}] {message}")

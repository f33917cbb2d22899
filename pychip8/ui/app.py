"""Pygame front end for the CHIP-8 interpreter."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pychip8.bus import MemoryError
from pychip8.cpu import CPUError
from pychip8.loader import ProgramTooLargeError
from pychip8.system import CycleGate, Machine, MachineConfig, create_machine
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import MONOCHROME, SCREEN_HEIGHT, SCREEN_WIDTH, Renderer, SpriteEdge
from pychip8.video.palette import Palette


@dataclass
class AppConfig:
    """Configuration for the CHIP-8 window."""

    rom_path: Optional[Path] = None
    scale: int = 16
    cycle_delay_ms: float = 1.0
    fullscreen: bool = False
    wrap_sprites: bool = False
    palette: Palette = MONOCHROME
    rng_seed: Optional[int] = None


class Chip8App:
    """Owns the machine and drives it from the pygame event loop."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._running = False
        self._machine: Machine | None = None
        self._renderer = Renderer(config.palette)
        self._gate = CycleGate(config.cycle_delay_ms, max_cycles=_MAX_CYCLES_PER_FRAME)
        self._pygame = None
        self._frame_counter = 0

    @property
    def machine(self) -> Machine | None:
        return self._machine

    @property
    def running(self) -> bool:
        return self._running

    def initialise_machine(self) -> Machine:
        if self._machine is not None:
            return self._machine

        if self._config.rom_path is None:
            raise RuntimeError("ROM image is required; pass a ROM path")
        rom_path = self._config.rom_path
        if not rom_path.exists():
            raise RuntimeError(f"ROM file not found: {rom_path}")

        edge = SpriteEdge.WRAP if self._config.wrap_sprites else SpriteEdge.CLIP
        machine = create_machine(MachineConfig(sprite_edge=edge, rng_seed=self._config.rng_seed))
        try:
            image = machine.load_program_from_path(rom_path)
        except ProgramTooLargeError as exc:
            raise RuntimeError(f"Failed to load {rom_path}: {exc}") from exc

        print(f"Loading rom: {rom_path} ({image.length} bytes)")
        self._machine = machine
        return machine

    def run(self) -> None:
        machine = self.initialise_machine()

        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        pygame.init()
        pygame.display.set_caption("CHIP-8")
        self._pygame = pygame

        scale = max(1, self._config.scale)
        flags = pygame.FULLSCREEN if self._config.fullscreen else 0
        screen = pygame.display.set_mode((SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale), flags)

        clock = pygame.time.Clock()
        self._running = True
        self._gate.start(pygame.time.get_ticks())

        try:
            while self._running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        self._running = False
                    elif event.type == pygame.KEYDOWN:
                        self._handle_key_event(pygame, event.key, pressed=True)
                    elif event.type == pygame.KEYUP:
                        self._handle_key_event(pygame, event.key, pressed=False)

                due = self._gate.cycles_due(pygame.time.get_ticks())
                if self._step_cpu(machine, due):
                    frame = self._renderer.render(machine.framebuffer, scale=scale)
                    screen.blit(frame.to_surface(), (0, 0))
                    pygame.display.flip()

                clock.tick(_FRAME_RATE)
                self._frame_counter += 1
        finally:
            pygame.quit()

    def _handle_key_event(self, pygame, key_code: int, *, pressed: bool) -> None:
        if self._machine is None:
            return
        name = pygame.key.name(key_code)
        if debug_enabled("input"):
            debug_log("input", "event=%s pressed=%s", name, pressed)
        keypad = self._machine.keypad
        if pressed:
            keypad.press_key(name)
        else:
            keypad.release_key(name)

    def _step_cpu(self, machine: Machine, cycles: int) -> int:
        executed = 0
        try:
            while executed < cycles:
                machine.step()
                executed += 1
        except (CPUError, MemoryError) as exc:
            self._running = False
            raise RuntimeError(f"Interpreter fault after {machine.cpu.cycle_count} cycles: {exc}") from exc

        if executed and debug_enabled("timing"):
            debug_log("timing", "frame=%d cycles=%d", self._frame_counter, executed)
        return executed


_FRAME_RATE = 60
_MAX_CYCLES_PER_FRAME = 1000

"""CHIP-8 execution engine."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Sequence

from pychip8.bus import MemorySystem
from pychip8.io import KEY_COUNT, Keypad
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import FrameBuffer, SpriteEdge, glyph_address

from .opcodes import INSTRUCTION_TABLE, Instruction, Operands, decode_operands, lookup


class CPUError(Exception):
    """Base error for interpreter faults."""


class IllegalOpcodeError(CPUError):
    """Raised when the fetched word is not a CHIP-8 instruction."""

    def __init__(self, opcode: int, address: int | None = None) -> None:
        self.opcode = opcode & 0xFFFF
        self.address = address
        where = "" if address is None else f" at {address:#05x}"
        super().__init__(f"invalid opcode {self.opcode:#06x}{where}")


class StackOverflowError(CPUError):
    """Raised by CALL when all stack slots are in use."""


class StackUnderflowError(CPUError):
    """Raised by RET when the stack is empty."""


PROGRAM_START = 0x200
STACK_DEPTH = 16
REGISTER_COUNT = 16
FLAG_REGISTER = 0xF


@dataclass
class CPUState:
    """Snapshot of the CHIP-8 register file."""

    v: bytearray = field(default_factory=lambda: bytearray(REGISTER_COUNT))
    i: int = 0x000
    pc: int = PROGRAM_START
    stack: list[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    sp: int = 0
    delay_timer: int = 0
    sound_timer: int = 0

    def clone(self) -> "CPUState":
        return CPUState(
            bytearray(self.v),
            self.i,
            self.pc,
            list(self.stack),
            self.sp,
            self.delay_timer,
            self.sound_timer,
        )


@dataclass
class Chip8CPU:
    """Fetch/decode/execute engine driven one cycle at a time."""

    memory: MemorySystem
    framebuffer: FrameBuffer = field(default_factory=FrameBuffer)
    keypad: Keypad = field(default_factory=Keypad)
    instruction_table: Sequence[Sequence[Instruction]] = field(default=INSTRUCTION_TABLE)
    sprite_edge: SpriteEdge = SpriteEdge.CLIP
    rng: random.Random = field(default_factory=random.Random)

    state: CPUState = field(default_factory=CPUState)
    cycle_count: int = 0
    last_opcode: int | None = None

    def reset(self) -> None:
        """Return registers, timers and stack to their power-on values."""

        self.state = CPUState()
        self.cycle_count = 0
        self.last_opcode = None

    def fetch(self) -> int:
        """Read the big-endian word at pc and advance pc past it."""

        word = self.memory.load16(self.state.pc)
        self.state.pc += 2
        return word

    def step(self) -> int:
        """Run one fetch-decode-execute-timer cycle and return the opcode."""

        pc_before = self.state.pc
        opcode = self.fetch()
        instruction = self._decode(opcode, pc_before)
        if debug_enabled("cpu"):
            debug_log("cpu", "pc=%03x opcode=%04x %s", pc_before, opcode, instruction.mnemonic)

        handler = getattr(self, instruction.handler, None)
        if handler is None:
            raise CPUError(f"handler '{instruction.handler}' not implemented")
        handler(decode_operands(opcode))

        self._tick_timers()
        self.cycle_count += 1
        self.last_opcode = opcode
        return opcode

    @property
    def sound_active(self) -> bool:
        return self.state.sound_timer > 0

    # ------------------------------------------------------------------
    # Flow control

    def op_cls(self, _: Operands) -> None:
        self.framebuffer.clear()

    def op_ret(self, _: Operands) -> None:
        state = self.state
        if state.sp == 0:
            raise StackUnderflowError(f"RET with empty stack at {state.pc - 2:#05x}")
        state.sp -= 1
        state.pc = state.stack[state.sp]

    def op_jp(self, ops: Operands) -> None:
        self.state.pc = ops.nnn

    def op_call(self, ops: Operands) -> None:
        state = self.state
        if state.sp >= STACK_DEPTH:
            raise StackOverflowError(f"CALL {ops.nnn:#05x} exceeds {STACK_DEPTH} nested levels")
        state.stack[state.sp] = state.pc
        state.sp += 1
        state.pc = ops.nnn

    def op_jp_v0(self, ops: Operands) -> None:
        # Not masked: a target past 0xFFF faults on the next fetch.
        self.state.pc = self.state.v[0] + ops.nnn

    def op_se_byte(self, ops: Operands) -> None:
        if self.state.v[ops.x] == ops.nn:
            self._skip()

    def op_sne_byte(self, ops: Operands) -> None:
        if self.state.v[ops.x] != ops.nn:
            self._skip()

    def op_se_reg(self, ops: Operands) -> None:
        if self.state.v[ops.x] == self.state.v[ops.y]:
            self._skip()

    def op_sne_reg(self, ops: Operands) -> None:
        if self.state.v[ops.x] != self.state.v[ops.y]:
            self._skip()

    # ------------------------------------------------------------------
    # Register loads and arithmetic

    def op_ld_byte(self, ops: Operands) -> None:
        self.state.v[ops.x] = ops.nn

    def op_add_byte(self, ops: Operands) -> None:
        v = self.state.v
        v[ops.x] = (v[ops.x] + ops.nn) & 0xFF

    def op_ld_reg(self, ops: Operands) -> None:
        v = self.state.v
        v[ops.x] = v[ops.y]

    def op_or(self, ops: Operands) -> None:
        v = self.state.v
        v[ops.x] = v[ops.x] | v[ops.y]

    def op_and(self, ops: Operands) -> None:
        v = self.state.v
        v[ops.x] = v[ops.x] & v[ops.y]

    def op_xor(self, ops: Operands) -> None:
        v = self.state.v
        v[ops.x] = v[ops.x] ^ v[ops.y]

    # The flag is written before the result, so with X == 0xF the result wins.

    def op_add_reg(self, ops: Operands) -> None:
        v = self.state.v
        total = v[ops.x] + v[ops.y]
        v[FLAG_REGISTER] = 1 if total > 0xFF else 0
        v[ops.x] = total & 0xFF

    def op_sub(self, ops: Operands) -> None:
        v = self.state.v
        v[FLAG_REGISTER] = 1 if v[ops.x] >= v[ops.y] else 0
        v[ops.x] = (v[ops.x] - v[ops.y]) & 0xFF

    def op_shr(self, ops: Operands) -> None:
        v = self.state.v
        v[FLAG_REGISTER] = v[ops.x] & 0x01
        v[ops.x] = v[ops.x] >> 1

    def op_subn(self, ops: Operands) -> None:
        v = self.state.v
        # Strictly greater: equal operands clear the flag.
        v[FLAG_REGISTER] = 1 if v[ops.y] > v[ops.x] else 0
        v[ops.x] = (v[ops.y] - v[ops.x]) & 0xFF

    def op_shl(self, ops: Operands) -> None:
        v = self.state.v
        v[FLAG_REGISTER] = (v[ops.x] & 0x80) >> 7
        v[ops.x] = (v[ops.x] << 1) & 0xFF

    def op_rnd(self, ops: Operands) -> None:
        self.state.v[ops.x] = self.rng.getrandbits(8) & ops.nn

    # ------------------------------------------------------------------
    # Index register and memory

    def op_ld_index(self, ops: Operands) -> None:
        self.state.i = ops.nnn

    def op_add_index(self, ops: Operands) -> None:
        self.state.i = (self.state.i + self.state.v[ops.x]) & 0xFFFF

    def op_ld_font(self, ops: Operands) -> None:
        self.state.i = glyph_address(self.state.v[ops.x]) & 0xFFFF

    def op_ld_bcd(self, ops: Operands) -> None:
        value = self.state.v[ops.x]
        base = self.state.i
        self.memory.store8(base, value // 100)
        self.memory.store8(base + 1, (value // 10) % 10)
        self.memory.store8(base + 2, value % 10)

    def op_store_regs(self, ops: Operands) -> None:
        state = self.state
        for index in range(ops.x + 1):
            self.memory.store8(state.i + index, state.v[index])

    def op_load_regs(self, ops: Operands) -> None:
        state = self.state
        for index in range(ops.x + 1):
            state.v[index] = self.memory.load8(state.i + index)

    # ------------------------------------------------------------------
    # Display

    def op_drw(self, ops: Operands) -> None:
        state = self.state
        x = state.v[ops.x]
        y = state.v[ops.y]
        # Read the whole sprite first so a memory fault leaves the screen untouched.
        sprite = bytes(self.memory.load8(state.i + row) for row in range(ops.n))

        state.v[FLAG_REGISTER] = 0
        if self.framebuffer.draw_sprite(x, y, sprite, self.sprite_edge):
            state.v[FLAG_REGISTER] = 1
        if debug_enabled("video"):
            debug_log(
                "video",
                "drw x=%d y=%d rows=%d i=%03x collision=%d",
                x,
                y,
                ops.n,
                state.i,
                state.v[FLAG_REGISTER],
            )

    # ------------------------------------------------------------------
    # Keypad and timers

    def op_skp(self, ops: Operands) -> None:
        if self._key_pressed(self.state.v[ops.x]):
            self._skip()

    def op_sknp(self, ops: Operands) -> None:
        if not self._key_pressed(self.state.v[ops.x]):
            self._skip()

    def op_ld_key(self, ops: Operands) -> None:
        pressed = self.keypad.pressed_keys()
        if not pressed:
            # Re-issue this instruction on the next cycle.
            self.state.pc -= 2
            return
        # Highest-indexed key wins when several are held.
        self.state.v[ops.x] = pressed[-1]
        if debug_enabled("input"):
            debug_log("input", "key_wait V%X <- %X", ops.x, pressed[-1])

    def op_ld_reg_dt(self, ops: Operands) -> None:
        self.state.v[ops.x] = self.state.delay_timer

    def op_ld_dt_reg(self, ops: Operands) -> None:
        self.state.delay_timer = self.state.v[ops.x]

    def op_ld_st_reg(self, ops: Operands) -> None:
        self.state.sound_timer = self.state.v[ops.x]

    # ------------------------------------------------------------------
    # Helpers

    def _decode(self, opcode: int, address: int) -> Instruction:
        instruction = lookup(opcode, self.instruction_table)
        if instruction is None:
            raise IllegalOpcodeError(opcode, address)
        return instruction

    def _skip(self) -> None:
        self.state.pc += 2

    def _key_pressed(self, key: int) -> bool:
        if key >= KEY_COUNT:
            raise CPUError(f"key index {key:#04x} out of range (0x0-0xF)")
        return self.keypad.is_pressed(key)

    def _tick_timers(self) -> None:
        state = self.state
        if state.delay_timer > 0:
            state.delay_timer -= 1
        if state.sound_timer > 0:
            state.sound_timer -= 1

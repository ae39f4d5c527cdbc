# CHIP8 Virtual Machine:
# Input - the set of held keys is passed in per cycle, key presses are queued for Fx0A.
# Output - 64x32 display stored as 32 bit-rows (most significant bit = leftmost column).
# CPU - Cowgod's CHIP8 Technical reference http://devernay.free.fr/hacks/chip8/C8TECH10.HTM#0.0
# Memory - 4096 bytes which includes: the fonts (0x000-0x04F) and the loaded program (0x200-).
#----------------------------------------------------------------------------------------------
# The machine owns no clock. The driver calls cycle() at the CPU rate and
# tick_timers() at 60Hz; both must be called from the same thread.

import random

import numpy as np

from .constants import (
    DISPLAY_HEIGHT,
    DISPLAY_WIDTH,
    FONT_BYTES_PER_DIGIT,
    FONT_START,
    FONTSET,
    MEMORY_SIZE,
    NUM_KEYS,
    NUM_REGISTERS,
    PROGRAM_START,
    ROW_MASK,
    STACK_SIZE,
)
from .errors import (
    DecodeError,
    ProgramCounterError,
    ProgramLoadError,
    StackOverflowError,
    StackUnderflowError,
)
from .opcodes import Opcode, decode


def default_random_source():
    """Return a callable producing uniformly random bytes from a freshly seeded generator."""
    rng = random.Random()
    rng.seed()
    return lambda: rng.getrandbits(8)


def rotate_row(bits, amount):
    """Rotate a 64-bit display row right by ``amount`` columns."""
    amount %= DISPLAY_WIDTH
    return ((bits >> amount) | (bits << (DISPLAY_WIDTH - amount))) & ROW_MASK


class Machine:
    """CHIP-8 interpreter state and the execute-one-cycle operation."""

    def __init__(self, random_byte=None):
        # random_byte: zero-argument callable returning an int in 0..255
        self.random_byte = random_byte or default_random_source()

        self.handlers = {
            Opcode.CLS: self.op_CLS,
            Opcode.RET: self.op_RET,
            Opcode.JP: self.op_JP,
            Opcode.CALL: self.op_CALL,
            Opcode.SE_VX_KK: self.op_SE_Vx_kk,
            Opcode.SNE_VX_KK: self.op_SNE_Vx_kk,
            Opcode.SE_VX_VY: self.op_SE_Vx_Vy,
            Opcode.LD_VX_KK: self.op_LD_Vx_kk,
            Opcode.ADD_VX_KK: self.op_ADD_Vx_kk,
            Opcode.LD_VX_VY: self.op_LD_Vx_Vy,
            Opcode.OR: self.op_OR,
            Opcode.AND: self.op_AND,
            Opcode.XOR: self.op_XOR,
            Opcode.ADD: self.op_ADD,
            Opcode.SUB: self.op_SUB,
            Opcode.SHR: self.op_SHR,
            Opcode.SUBN: self.op_SUBN,
            Opcode.SHL: self.op_SHL,
            Opcode.SNE_VX_VY: self.op_SNE_Vx_Vy,
            Opcode.LD_I: self.op_LD_I,
            Opcode.JP_V0: self.op_JP_V0,
            Opcode.RND: self.op_RND,
            Opcode.DRW: self.op_DRW,
            Opcode.SKP: self.op_SKP,
            Opcode.SKNP: self.op_SKNP,
            Opcode.LD_VX_DT: self.op_LD_Vx_DT,
            Opcode.WAITKEY: self.op_WAITKEY,
            Opcode.LD_DT_VX: self.op_LD_DT_Vx,
            Opcode.LD_ST_VX: self.op_LD_ST_Vx,
            Opcode.ADD_I_VX: self.op_ADD_I_Vx,
            Opcode.FONT: self.op_FONT,
            Opcode.BCD: self.op_BCD,
            Opcode.STORE: self.op_STORE,
            Opcode.LOAD: self.op_LOAD,
        }
        self.reset()

    def reset(self):
        """Return to the power-on state. The random source is kept."""
        self.memory = bytearray(MEMORY_SIZE)
        self.memory[FONT_START:FONT_START + len(FONTSET)] = bytes(FONTSET)
        self.V = [0] * NUM_REGISTERS
        self.I = 0
        self.pc = PROGRAM_START
        self.stack = []
        self.delay = 0
        self.sound = 0
        self.display = [0] * DISPLAY_HEIGHT
        self.pending_keys = []
        self.keys = frozenset()

    # ---- Program load ----
    def load_program(self, data, start=PROGRAM_START):
        data = bytes(data)
        if start < 0 or start + len(data) > MEMORY_SIZE:
            raise ProgramLoadError(start, len(data), MEMORY_SIZE)
        self.memory[start:start + len(data)] = data

    # ---- Input ----
    def record_key(self, key):
        """Queue a logical key press for the wait-for-key instruction."""
        if not 0 <= key < NUM_KEYS:
            raise ValueError("logical key out of range: %r" % (key,))
        self.pending_keys.append(key)

    # ---- Timers ----
    def tick_timers(self):
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

    # ---- Display ----
    def framebuffer(self):
        """Return the display as a read-only (32, 64) array of 0/1 pixels."""
        rows = np.array(self.display, dtype=">u8").view(np.uint8)
        pixels = np.unpackbits(rows).reshape(DISPLAY_HEIGHT, DISPLAY_WIDTH)
        pixels.setflags(write=False)
        return pixels

    def pixel(self, x, y):
        return (self.display[y] >> (DISPLAY_WIDTH - 1 - x)) & 1

    # ---- Cycle ----
    def cycle(self, pressed=()):
        """Fetch, decode and execute one instruction.

        ``pressed`` is the collection of logical keys held right now; it is
        consulted by Ex9E and ExA1. Returns the decoded instruction, or raises
        a ``Chip8Error`` subclass when the program faults.
        """
        if not 0 <= self.pc <= MEMORY_SIZE - 2:
            raise ProgramCounterError(self.pc)

        opcode = (self.memory[self.pc] << 8) | self.memory[self.pc + 1]
        self.pc += 2

        instruction = decode(opcode)
        if instruction is None:
            raise DecodeError(opcode, self.pc - 2)

        self.keys = frozenset(pressed)
        self.handlers[instruction.op](instruction)
        return instruction

    def _address(self, offset=0):
        # memory reads/writes through I wrap around the 4K address space
        return (self.I + offset) % MEMORY_SIZE

    # ---- Opcode handlers ----
    def op_CLS(self, ins):
        self.display = [0] * DISPLAY_HEIGHT

    def op_RET(self, ins):
        if not self.stack:
            raise StackUnderflowError(self.pc - 2)
        self.pc = self.stack.pop()

    def op_JP(self, ins):
        self.pc = ins.nnn

    def op_CALL(self, ins):
        if len(self.stack) >= STACK_SIZE:
            raise StackOverflowError(self.pc - 2)
        self.stack.append(self.pc)
        self.pc = ins.nnn

    def op_SE_Vx_kk(self, ins):
        if self.V[ins.x] == ins.kk:
            self.pc += 2

    def op_SNE_Vx_kk(self, ins):
        if self.V[ins.x] != ins.kk:
            self.pc += 2

    def op_SE_Vx_Vy(self, ins):
        if self.V[ins.x] == self.V[ins.y]:
            self.pc += 2

    def op_LD_Vx_kk(self, ins):
        self.V[ins.x] = ins.kk

    def op_ADD_Vx_kk(self, ins):
        self.V[ins.x] = (self.V[ins.x] + ins.kk) & 0xFF

    def op_LD_Vx_Vy(self, ins):
        self.V[ins.x] = self.V[ins.y]

    def op_OR(self, ins):
        self.V[ins.x] |= self.V[ins.y]

    def op_AND(self, ins):
        self.V[ins.x] &= self.V[ins.y]

    def op_XOR(self, ins):
        self.V[ins.x] ^= self.V[ins.y]

    # The flag is always written last: VF may be Vx or Vy.
    def op_ADD(self, ins):
        total = self.V[ins.x] + self.V[ins.y]
        self.V[ins.x] = total & 0xFF
        self.V[0xF] = 1 if total > 0xFF else 0

    def op_SUB(self, ins):
        vx, vy = self.V[ins.x], self.V[ins.y]
        self.V[ins.x] = (vx - vy) & 0xFF
        self.V[0xF] = 1 if vx >= vy else 0

    # 8xy6/8xyE shift Vx in place and ignore Vy (CHIP-48/SCHIP convention).
    def op_SHR(self, ins):
        vx = self.V[ins.x]
        self.V[ins.x] = vx >> 1
        self.V[0xF] = vx & 1

    def op_SUBN(self, ins):
        vx, vy = self.V[ins.x], self.V[ins.y]
        self.V[ins.x] = (vy - vx) & 0xFF
        self.V[0xF] = 1 if vy >= vx else 0

    def op_SHL(self, ins):
        vx = self.V[ins.x]
        self.V[ins.x] = (vx << 1) & 0xFF
        self.V[0xF] = (vx >> 7) & 1

    def op_SNE_Vx_Vy(self, ins):
        if self.V[ins.x] != self.V[ins.y]:
            self.pc += 2

    def op_LD_I(self, ins):
        self.I = ins.nnn

    def op_JP_V0(self, ins):
        self.pc = self.V[0] + ins.nnn

    def op_RND(self, ins):
        self.V[ins.x] = (self.random_byte() & 0xFF) & ins.kk

    def op_DRW(self, ins):
        px = self.V[ins.x]
        py = self.V[ins.y]
        collision = False
        for row in range(ins.n):
            sprite = self.memory[self._address(row)] << (DISPLAY_WIDTH - 8)
            bits = rotate_row(sprite, px)
            r = (py + row) % DISPLAY_HEIGHT
            if self.display[r] & bits:
                collision = True
            self.display[r] ^= bits
        self.V[0xF] = 1 if collision else 0

    def op_SKP(self, ins):
        if self.V[ins.x] in self.keys:
            self.pc += 2

    def op_SKNP(self, ins):
        if self.V[ins.x] not in self.keys:
            self.pc += 2

    def op_LD_Vx_DT(self, ins):
        self.V[ins.x] = self.delay

    def op_WAITKEY(self, ins):
        if not self.pending_keys:
            self.pc -= 2  # stall, this instruction runs again next cycle
            return
        self.V[ins.x] = self.pending_keys[0]
        self.pending_keys.clear()

    def op_LD_DT_Vx(self, ins):
        self.delay = self.V[ins.x]

    def op_LD_ST_Vx(self, ins):
        self.sound = self.V[ins.x]

    def op_ADD_I_Vx(self, ins):
        self.I = (self.I + self.V[ins.x]) & 0xFFFF

    def op_FONT(self, ins):
        self.I = FONT_START + FONT_BYTES_PER_DIGIT * self.V[ins.x]

    def op_BCD(self, ins):
        v = self.V[ins.x]
        self.memory[self._address(0)] = v // 100
        self.memory[self._address(1)] = (v // 10) % 10
        self.memory[self._address(2)] = v % 10

    def op_STORE(self, ins):
        for i in range(ins.x + 1):
            self.memory[self._address(i)] = self.V[i]

    def op_LOAD(self, ins):
        for i in range(ins.x + 1):
            self.V[i] = self.memory[self._address(i)]

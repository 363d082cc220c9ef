# CHIP8 Virtual Machine
#----------------------------------------------------------------------------------------------
# Input - key states latched by the host and checked per cycle.
# Output - 64x32 display (pixels are either on or off) & sound buzzer (sound timer nonzero).
# CPU - Cowgod's CHIP8 Technical reference http://devernay.free.fr/hacks/chip8/C8TECH10.HTM
# Memory - 4096 bytes which hold the interpreter area, the fonts and the ROM.
#----------------------------------------------------------------------------------------------
# 16 general purpose registers V0..VF (VF doubles as the carry/borrow/collision flag),
# the index register I, the program counter and a 16 entry stack of return addresses.
# The timers live in Timers and are ticked by the host at 60 Hz, never by the CPU.

import random
from collections import namedtuple

import numpy as np

from . import config
from .config import log
from .decoder import decode, OPCODES
from .disasm import disassemble
from .display import Display
from .errors import (
    AddressError,
    ExecutionError,
    OperandError,
    StackOverflow,
    StackUnderflow,
)
from .keypad import Keypad
from .memory import Memory, PROGRAM_START, MEMORY_END, font_address
from .timers import Timers

STACK_SIZE = 16

CycleResult = namedtuple("CycleResult", "drawn halted error")


class Chip8:
    """One CHIP-8 machine: memory, registers, stack, timers, display and keys."""

    def __init__(self, rom=b"", rng=None):
        self.memory = Memory(rom)
        self.display = Display()
        self.keypad = Keypad()
        self.timers = Timers()
        self.rng = rng if rng is not None else random.Random()

        self.V = [0] * 16
        self.I = 0
        self.pc = PROGRAM_START
        self.stack = np.zeros(STACK_SIZE, dtype=np.uint16)
        self.sp = 0

        self.waiting = None         # register index Fx0A stores the key in
        self._wait_keys = None      # key states at the previous wait poll
        self.should_draw = False
        self.halted = False
        self.error = None
        self.cycles = 0

        # dispatch table
        self.handlers = {name: getattr(self, "op_" + name) for _, _, name, _ in OPCODES}

    def __str__(self):
        return self.dump()

    # lifecycle
    def reset(self):
        """Back to the exact post-load state, reusing the same buffers."""
        self.memory.reset()
        self.display.clear()
        self.keypad.reset()
        self.timers.reset()
        self.V[:] = [0] * 16
        self.I = 0
        self.pc = PROGRAM_START
        self.stack.fill(0)
        self.sp = 0
        self.waiting = None
        self._wait_keys = None
        self.should_draw = False
        self.halted = False
        self.error = None
        self.cycles = 0
        log("Reset machine, ROM size", len(self.memory.rom))

    @property
    def rom(self):
        return self.memory.rom

    # host surface
    def latch_keys(self, states):
        self.keypad.latch(states)

    def tick_timers(self):
        return self.timers.tick()

    def sound_active(self):
        return self.timers.sound_active()

    # cycle
    def execute_cycle(self):
        """Run one instruction, reporting a fatal error instead of raising it."""
        if self.halted:
            return CycleResult(False, True, self.error)
        try:
            drawn = self.step()
        except ExecutionError as e:
            self.halted = True
            self.error = e
            log("Emulation error:", e)
            return CycleResult(False, True, e)
        return CycleResult(drawn, False, None)

    def step(self):
        """Fetch, decode and execute one instruction.

        Returns True if the display changed. Raises an ExecutionError subclass on
        a fatal fault, with PC left on the faulting instruction.
        """
        self.should_draw = False
        self.cycles += 1

        if self.waiting is not None:
            self._poll_key()
            return False

        address = self.pc
        word = None
        try:
            word = self.memory.fetch(address)
            instruction = decode(word)
            if config.logs_on:
                log(f"0x{address:03X}: {word:04X}  {disassemble(word)}")
            self.pc = address + 2
            self.handlers[instruction.name](instruction)
            self._check_pc()
        except ExecutionError as e:
            self.pc = address
            raise e.locate(address, word)
        return self.should_draw

    def _poll_key(self):
        key = self.keypad.newly_pressed(self._wait_keys)
        if key is None:
            self._wait_keys = self.keypad.copy()
            return
        self.V[self.waiting] = key
        log(f"Key 0x{key:X} pressed, stored in V{self.waiting:X}")
        self.waiting = None
        self._wait_keys = None

    def _check_pc(self):
        if not PROGRAM_START <= self.pc <= MEMORY_END or self.pc & 1:
            raise AddressError(f"program counter 0x{self.pc:03X} left program memory")

    def _jump(self, address):
        if not PROGRAM_START <= address <= MEMORY_END or address & 1:
            raise AddressError(f"jump target 0x{address:03X} is not a valid instruction address")
        self.pc = address

    def _skip(self):
        self._jump(self.pc + 2)

    # opcode handlers
    def op_CLS(self, ins):
        self.display.clear()
        self.should_draw = True

    def op_RET(self, ins):
        if self.sp == 0:
            raise StackUnderflow("RET with an empty stack")
        self.sp -= 1
        self.pc = int(self.stack[self.sp])

    def op_JP(self, ins):
        self._jump(ins.nnn)

    def op_CALL(self, ins):
        if self.sp >= STACK_SIZE:
            raise StackOverflow(f"CALL with all {STACK_SIZE} stack frames in use")
        return_address = self.pc
        self._jump(ins.nnn)
        self.stack[self.sp] = return_address
        self.sp += 1

    def op_SE_Vx_kk(self, ins):
        if self.V[ins.x] == ins.kk:
            self._skip()

    def op_SNE_Vx_kk(self, ins):
        if self.V[ins.x] != ins.kk:
            self._skip()

    def op_SE_Vx_Vy(self, ins):
        if self.V[ins.x] == self.V[ins.y]:
            self._skip()

    def op_SNE_Vx_Vy(self, ins):
        if self.V[ins.x] != self.V[ins.y]:
            self._skip()

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

    # VF is written after Vx in the flag setting ops, so for x == F the flag wins
    def op_ADD(self, ins):
        total = self.V[ins.x] + self.V[ins.y]
        self.V[ins.x] = total & 0xFF
        self.V[0xF] = 1 if total > 0xFF else 0

    def op_SUB(self, ins):
        vx, vy = self.V[ins.x], self.V[ins.y]
        self.V[ins.x] = (vx - vy) & 0xFF
        self.V[0xF] = 1 if vx >= vy else 0

    def op_SUBN(self, ins):
        vx, vy = self.V[ins.x], self.V[ins.y]
        self.V[ins.x] = (vy - vx) & 0xFF
        self.V[0xF] = 1 if vy >= vx else 0

    # shifts work on Vx, Vy is ignored
    def op_SHR(self, ins):
        vx = self.V[ins.x]
        self.V[ins.x] = vx >> 1
        self.V[0xF] = vx & 1

    def op_SHL(self, ins):
        vx = self.V[ins.x]
        self.V[ins.x] = (vx << 1) & 0xFF
        self.V[0xF] = (vx >> 7) & 1

    def op_LD_I(self, ins):
        self.I = ins.nnn

    def op_JP_V0(self, ins):
        self._jump(ins.nnn + self.V[0])

    def op_RND(self, ins):
        self.V[ins.x] = self.rng.randint(0, 255) & ins.kk

    def op_DRW(self, ins):
        sprite = self.memory.read_block(self.I, ins.n)
        collided = self.display.draw_sprite(self.V[ins.x], self.V[ins.y], sprite)
        self.V[0xF] = 1 if collided else 0
        self.should_draw = True

    def op_SKP(self, ins):
        if self.keypad.pressed(self.V[ins.x]):
            self._skip()

    def op_SKNP(self, ins):
        if not self.keypad.pressed(self.V[ins.x]):
            self._skip()

    def op_LD_Vx_DT(self, ins):
        self.V[ins.x] = self.timers.delay

    def op_WAITKEY(self, ins):
        # PC already points past Fx0A; step() polls the keys until one goes down
        self.waiting = ins.x
        self._wait_keys = self.keypad.copy()

    def op_LD_DT_Vx(self, ins):
        self.timers.delay = self.V[ins.x]

    def op_LD_ST_Vx(self, ins):
        self.timers.sound = self.V[ins.x]

    def op_ADD_I_Vx(self, ins):
        # no VF on overflow past 0xFFF
        self.I = (self.I + self.V[ins.x]) & 0xFFFF

    def op_FONT(self, ins):
        digit = self.V[ins.x]
        if digit > 0xF:
            raise OperandError(f"V{ins.x:X} = 0x{digit:02X} is not a hex digit")
        self.I = font_address(digit)

    def op_BCD(self, ins):
        v = self.V[ins.x]
        self.memory.write_block(self.I, (v // 100, (v // 10) % 10, v % 10))

    def op_STORE(self, ins):
        self.memory.write_block(self.I, self.V[:ins.x + 1])
        self.I += ins.x + 1

    def op_LOAD(self, ins):
        self.V[:ins.x + 1] = self.memory.read_block(self.I, ins.x + 1)
        self.I += ins.x + 1

    # debugging
    def dump(self):
        """Processor state, for crash reports and the trace log."""
        try:
            word = self.memory.fetch(self.pc)
            current = f"{word:04X}  {disassemble(word)}"
        except AddressError:
            current = "----"
        lines = [f"PC: 0x{self.pc:03X}    {current}"]
        lines.append("    " + " ".join(f"V{i:X}: {self.V[i]:02X}" for i in range(8)))
        lines.append("    " + " ".join(f"V{i:X}: {self.V[i]:02X}" for i in range(8, 16)))
        lines.append(f"    I: 0x{self.I:03X}  SP: {self.sp}  DT: {self.timers.delay}  ST: {self.timers.sound}")
        stack = " ".join(f"0x{int(a):03X}" for a in self.stack[:self.sp])
        lines.append(f"    STACK: [{stack}]")
        if self.waiting is not None:
            lines.append(f"    WAITING FOR KEY -> V{self.waiting:X}")
        return "\n".join(lines)

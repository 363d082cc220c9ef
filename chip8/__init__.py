"""CHIP-8 interpreter core with a pyglet front end."""

from .cpu import Chip8, CycleResult
from .decoder import Instruction, decode
from .disasm import disassemble, listing
from .display import Display
from .emulator import Emulator, FrameResult, load_rom
from .errors import (
    AddressError,
    Chip8Error,
    DecodeError,
    ExecutionError,
    LoadError,
    OperandError,
    StackOverflow,
    StackUnderflow,
)

__version__ = "0.4.0"

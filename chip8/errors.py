"""Exceptions raised by the CHIP-8 core.

Everything here is fatal: a CHIP-8 ROM is a trusted, compiled binary, so any
of these means either a malformed ROM or an instruction the interpreter does
not support.
"""


class Chip8Error(Exception):
    """Base class for every emulator error."""


class LoadError(Chip8Error):
    """The ROM image could not be read or does not fit in program memory."""


class ExecutionError(Chip8Error):
    """A fault raised while executing an instruction.

    ``address`` is the PC of the faulting instruction and ``word`` the raw
    16-bit instruction; both are filled in by the CPU when the error leaves
    ``Chip8.step``.
    """

    def __init__(self, message, address=None, word=None):
        super().__init__(message)
        self.message = message
        self.address = address
        self.word = word

    def locate(self, address, word):
        if self.address is None:
            self.address = address
        if self.word is None:
            self.word = word
        return self

    def __str__(self):
        where = []
        if self.address is not None:
            where.append(f"address 0x{self.address:03X}")
        if self.word is not None:
            where.append(f"word 0x{self.word:04X}")
        if where:
            return f"{self.message} ({', '.join(where)})"
        return self.message


class DecodeError(ExecutionError):
    """Unknown or unsupported instruction word."""


class StackOverflow(ExecutionError):
    """CALL with all 16 stack frames in use."""


class StackUnderflow(ExecutionError):
    """RET with an empty stack."""


class AddressError(ExecutionError):
    """Memory access or program counter outside the allowed range."""


class OperandError(ExecutionError):
    """Register operand outside the range an instruction accepts."""

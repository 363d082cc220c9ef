# Disassembler - turns words back into Cowgod-style assembly for logs and ROM listings

from .decoder import ASSEMBLY, decode
from .errors import DecodeError
from .memory import PROGRAM_START


def disassemble(word):
    try:
        instruction = decode(word)
    except DecodeError:
        return f"DW 0x{word:04X}"
    return ASSEMBLY[instruction.name].format(**instruction._asdict())


def listing(rom, origin=PROGRAM_START):
    """Yield one ``0x200:  00E0  CLS`` line per 2-byte word of ``rom``.

    An odd trailing byte is shown as a DB line since it can't be an instruction.
    """
    rom = bytes(rom)
    for offset in range(0, len(rom) - 1, 2):
        word = rom[offset] << 8 | rom[offset + 1]
        yield f"0x{origin + offset:03X}:  {word:04X}  {disassemble(word)}"
    if len(rom) % 2:
        yield f"0x{origin + len(rom) - 1:03X}:  {rom[-1]:02X}    DB 0x{rom[-1]:02X}"

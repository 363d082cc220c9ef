# Decoder - 16-bit instruction word -> Instruction
#----------------------------------------------------------------------------------------------
# Cowgod's CHIP8 Technical reference http://devernay.free.fr/hacks/chip8/C8TECH10.HTM
#
#   nnn or addr - lowest 12 bits of the instruction
#   n or nibble - lowest 4 bits
#   x           - lower 4 bits of the high byte
#   y           - upper 4 bits of the low byte
#   kk or byte  - lowest 8 bits

from collections import namedtuple
from functools import lru_cache

from .errors import DecodeError

Instruction = namedtuple("Instruction", "name word x y n kk nnn")

# dispatch table: (mask, pattern, name, assembly)
OPCODES = [
    (0xFFFF, 0x00E0, "CLS", "CLS"),
    (0xFFFF, 0x00EE, "RET", "RET"),

    (0xF000, 0x1000, "JP", "JP 0x{nnn:03X}"),
    (0xF000, 0x2000, "CALL", "CALL 0x{nnn:03X}"),
    (0xF000, 0x3000, "SE_Vx_kk", "SE V{x:X}, 0x{kk:02X}"),
    (0xF000, 0x4000, "SNE_Vx_kk", "SNE V{x:X}, 0x{kk:02X}"),
    (0xF00F, 0x5000, "SE_Vx_Vy", "SE V{x:X}, V{y:X}"),
    (0xF000, 0x6000, "LD_Vx_kk", "LD V{x:X}, 0x{kk:02X}"),
    (0xF000, 0x7000, "ADD_Vx_kk", "ADD V{x:X}, 0x{kk:02X}"),

    (0xF00F, 0x8000, "LD_Vx_Vy", "LD V{x:X}, V{y:X}"),
    (0xF00F, 0x8001, "OR", "OR V{x:X}, V{y:X}"),
    (0xF00F, 0x8002, "AND", "AND V{x:X}, V{y:X}"),
    (0xF00F, 0x8003, "XOR", "XOR V{x:X}, V{y:X}"),
    (0xF00F, 0x8004, "ADD", "ADD V{x:X}, V{y:X}"),
    (0xF00F, 0x8005, "SUB", "SUB V{x:X}, V{y:X}"),
    (0xF00F, 0x8006, "SHR", "SHR V{x:X}"),
    (0xF00F, 0x8007, "SUBN", "SUBN V{x:X}, V{y:X}"),
    (0xF00F, 0x800E, "SHL", "SHL V{x:X}"),

    (0xF00F, 0x9000, "SNE_Vx_Vy", "SNE V{x:X}, V{y:X}"),
    (0xF000, 0xA000, "LD_I", "LD I, 0x{nnn:03X}"),
    (0xF000, 0xB000, "JP_V0", "JP V0, 0x{nnn:03X}"),
    (0xF000, 0xC000, "RND", "RND V{x:X}, 0x{kk:02X}"),
    (0xF000, 0xD000, "DRW", "DRW V{x:X}, V{y:X}, {n}"),

    (0xF0FF, 0xE09E, "SKP", "SKP V{x:X}"),
    (0xF0FF, 0xE0A1, "SKNP", "SKNP V{x:X}"),

    (0xF0FF, 0xF007, "LD_Vx_DT", "LD V{x:X}, DT"),
    (0xF0FF, 0xF00A, "WAITKEY", "LD V{x:X}, K"),
    (0xF0FF, 0xF015, "LD_DT_Vx", "LD DT, V{x:X}"),
    (0xF0FF, 0xF018, "LD_ST_Vx", "LD ST, V{x:X}"),
    (0xF0FF, 0xF01E, "ADD_I_Vx", "ADD I, V{x:X}"),
    (0xF0FF, 0xF029, "FONT", "LD F, V{x:X}"),
    (0xF0FF, 0xF033, "BCD", "LD B, V{x:X}"),
    (0xF0FF, 0xF055, "STORE", "LD [I], V{x:X}"),
    (0xF0FF, 0xF065, "LOAD", "LD V{x:X}, [I]"),
]

ASSEMBLY = {name: asm for _, _, name, asm in OPCODES}


@lru_cache(maxsize=None)
def decode(word):
    """Match ``word`` against the dispatch table.

    Raises DecodeError for anything that is not a plain CHIP-8 instruction,
    including 0nnn (SYS) and 5xy/9xy words whose low nibble is not zero.
    """
    for mask, pattern, name, _ in OPCODES:
        if word & mask == pattern:
            return Instruction(
                name=name,
                word=word,
                x=(word >> 8) & 0xF,
                y=(word >> 4) & 0xF,
                n=word & 0xF,
                kk=word & 0xFF,
                nnn=word & 0x0FFF,
            )
    raise DecodeError(f"unknown opcode {word:04X}", word=word)

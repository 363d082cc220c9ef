# Memory - 4096 bytes holding the interpreter area, the font and the ROM.
#----------------------------------------------------------------------------------------------
# 0x000-0x1FF is reserved for the interpreter; we only keep the font there (0x050-0x09F).
# Programs start at 0x200. Nothing but the font install may write below 0x200.

from .errors import AddressError, LoadError

MEMORY_SIZE = 4096
PROGRAM_START = 0x200
MEMORY_END = MEMORY_SIZE - 1
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START    # 3584 bytes

FONT_START = 0x050
FONT_HEIGHT = 5

# set fonts (binary pixel patterns)
FONTSET = [
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
] #notice 80 bytes

FONT_END = FONT_START + len(FONTSET)


def font_address(digit):
    """Address of the 5-byte sprite for hex digit ``digit``."""
    return FONT_START + digit * FONT_HEIGHT


class Memory:
    def __init__(self, rom=b""):
        self.data = bytearray(MEMORY_SIZE)
        self.rom = b""
        self.load_program(rom)

    def __len__(self):
        return MEMORY_SIZE

    def __getitem__(self, address):
        return self.data[address]

    def load_program(self, rom):
        """Install the font and copy ``rom`` to 0x200; the ROM is kept for reset()."""
        rom = bytes(rom)
        if len(rom) > MAX_PROGRAM_SIZE:
            raise LoadError(
                f"ROM is {len(rom)} bytes, program space holds at most {MAX_PROGRAM_SIZE} bytes"
            )
        self.rom = rom
        self.reset()

    def reset(self):
        """Zero memory in place and re-copy the font and the retained ROM."""
        self.data[:] = bytes(MEMORY_SIZE)
        self.data[FONT_START:FONT_END] = bytes(FONTSET)
        self.data[PROGRAM_START:PROGRAM_START + len(self.rom)] = self.rom

    def fetch(self, address):
        """Big-endian instruction word at [address, address + 1]."""
        if address < PROGRAM_START or address + 1 > MEMORY_END:
            raise AddressError(f"instruction fetch outside program memory at 0x{address:03X}")
        return self.data[address] << 8 | self.data[address + 1]

    def read(self, address):
        self._check_range(address, 1)
        return self.data[address]

    def read_block(self, address, length):
        self._check_range(address, length)
        return bytes(self.data[address:address + length])

    def write(self, address, value):
        self._check_writable(address, 1)
        self.data[address] = value & 0xFF

    def write_block(self, address, values):
        values = bytes(v & 0xFF for v in values)
        self._check_writable(address, len(values))
        self.data[address:address + len(values)] = values

    def _check_range(self, address, length):
        if address < 0 or address + length > MEMORY_SIZE:
            raise AddressError(
                f"access of {length} byte(s) at 0x{address:03X} runs past the end of memory"
            )

    def _check_writable(self, address, length):
        self._check_range(address, length)
        if address < PROGRAM_START:
            raise AddressError(f"write to reserved interpreter memory at 0x{address:03X}")

from collections import namedtuple
from pathlib import Path

from .config import CPU_HZ, TIMER_HZ, log
from .cpu import Chip8
from .errors import LoadError
from .memory import MAX_PROGRAM_SIZE

FrameResult = namedtuple("FrameResult", "drawn sound halted error")


def load_rom(path):
    """Read a ROM image from disk, refusing anything that can't fit at 0x200."""
    log("Loading ROM:", path)
    try:
        rom = Path(path).read_bytes()
    except OSError as e:
        raise LoadError(f"cannot read ROM {path}: {e.strerror or e}") from e
    if len(rom) > MAX_PROGRAM_SIZE:
        raise LoadError(
            f"ROM {path} is {len(rom)} bytes, program space holds at most {MAX_PROGRAM_SIZE} bytes"
        )
    return rom


class Emulator:
    """Drives a Chip8 in 60 Hz frames: a batch of CPU cycles, then one timer tick."""

    def __init__(self, rom, cpu_hz=CPU_HZ, timer_hz=TIMER_HZ, rng=None):
        if cpu_hz <= 0 or timer_hz <= 0:
            raise ValueError("clock rates must be positive")
        self.machine = Chip8(rom, rng=rng)
        self.cpu_hz = cpu_hz
        self.timer_hz = timer_hz
        self.cycles_per_frame = max(1, round(cpu_hz / timer_hz))

    @classmethod
    def from_file(cls, path, **kwargs):
        return cls(load_rom(path), **kwargs)

    @property
    def halted(self):
        return self.machine.halted

    def frame(self, keys=None):
        """Run one time slice and report what the host has to present."""
        machine = self.machine
        if keys is not None:
            machine.latch_keys(keys)

        drawn = False
        for _ in range(self.cycles_per_frame):
            result = machine.execute_cycle()
            drawn = drawn or result.drawn
            if result.halted:
                return FrameResult(drawn, machine.sound_active(), True, result.error)

        machine.tick_timers()
        return FrameResult(drawn, machine.sound_active(), False, None)

    def reset(self):
        self.machine.reset()

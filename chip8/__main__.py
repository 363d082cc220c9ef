import argparse
import sys
from pathlib import Path

from . import config
from .config import CPU_HZ, SCALE, TIMER_HZ
from .disasm import listing
from .emulator import Emulator, load_rom
from .errors import LoadError

EXIT_OK = 0
EXIT_LOAD_ERROR = 1
EXIT_RUNTIME_ERROR = 3


def get_args(argv=None):
    parser = argparse.ArgumentParser(prog="chip8", description="CHIP-8 emulator")
    parser.add_argument("rom", help="input rom file")
    parser.add_argument("--cpu-hz", type=int, default=CPU_HZ,
                        help=f"instructions per second (default {CPU_HZ})")
    parser.add_argument("--scale", type=int, default=SCALE,
                        help=f"window pixels per CHIP-8 pixel (default {SCALE})")
    parser.add_argument("--disassemble", action="store_true",
                        help="print the ROM listing and exit")
    parser.add_argument("--debug", action="store_true",
                        help="start with the instruction log on (F1 toggles it)")
    args = parser.parse_args(argv)
    if args.cpu_hz <= 0:
        parser.error("--cpu-hz must be positive")
    if args.scale <= 0:
        parser.error("--scale must be positive")
    return args


def main(argv=None):
    args = get_args(argv)
    if args.debug:
        config.set_logs(True)

    try:
        rom = load_rom(args.rom)
    except LoadError as e:
        print(f"Failure during ROM open/read\n{e}", file=sys.stderr)
        return EXIT_LOAD_ERROR

    if args.disassemble:
        for line in listing(rom):
            print(line)
        return EXIT_OK

    # pyglet is only needed once there is something to show
    import pyglet
    from .window import Chip8Window

    emulator = Emulator(rom, cpu_hz=args.cpu_hz, timer_hz=TIMER_HZ)
    window = Chip8Window(emulator, title=Path(args.rom).name, scale=args.scale)
    pyglet.app.run()
    return EXIT_RUNTIME_ERROR if window.error is not None else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

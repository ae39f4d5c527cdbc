import sys
from pathlib import Path

from .config import Config, log
from .errors import Chip8Error
from .machine import Machine


def load_rom(path):
    return Path(path).read_bytes()


def run(rom_path, settings=None):
    """Load ``rom_path`` and run it until the window closes.

    Returns the process exit status.
    """
    try:
        rom = load_rom(rom_path)
    except FileNotFoundError:
        print("Could not find file `%s`" % rom_path, file=sys.stderr)
        return 1
    except OSError as e:
        print("Could not read file `%s`: %s" % (rom_path, e.strerror or e), file=sys.stderr)
        return 1

    machine = Machine()
    try:
        machine.load_program(rom)
    except Chip8Error as e:
        print("Could not load `%s`: %s" % (rom_path, e), file=sys.stderr)
        return 1
    log("Loading ROM:", rom_path, "(%d bytes)" % len(rom))

    # pyglet opens a display connection on import of its window module
    import pyglet
    from .window import Chip8Window

    window = Chip8Window(machine, settings or Config())
    pyglet.app.run()

    if window.error is not None:
        print("Emulation stopped:", window.error, file=sys.stderr)
        return 1
    return 0


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 1:
        print("Usage: chip8vm <rom-file>", file=sys.stderr)
        return 1
    return run(args[0])


if __name__ == "__main__":
    sys.exit(main())

"""Faults raised by the CHIP-8 machine.

Every fault is terminal for the running program; the driver decides whether
to halt or restart.
"""


class Chip8Error(Exception):
    """Base class for every machine fault."""


class ProgramLoadError(Chip8Error):
    """The program image does not fit in memory."""

    def __init__(self, start, length, limit):
        self.start = start
        self.length = length
        self.limit = limit
        super().__init__(
            "program of %d bytes at 0x%03X does not fit in %d bytes of memory"
            % (length, start, limit)
        )


class DecodeError(Chip8Error):
    """Instruction word matches no known opcode."""

    def __init__(self, opcode, address):
        self.opcode = opcode
        self.address = address
        super().__init__("Unknown opcode %04X at pc=0x%03X" % (opcode, address))


class StackOverflowError(Chip8Error):
    def __init__(self, address):
        self.address = address
        super().__init__("Stack overflow on CALL at pc=0x%03X" % address)


class StackUnderflowError(Chip8Error):
    def __init__(self, address):
        self.address = address
        super().__init__("Stack underflow on 00EE at pc=0x%03X" % address)


class ProgramCounterError(Chip8Error):
    def __init__(self, pc):
        self.pc = pc
        super().__init__("PC out of bounds: 0x%03X" % pc)

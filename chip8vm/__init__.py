"""CHIP-8 virtual machine with a pyglet front end."""

from .errors import (
    Chip8Error,
    DecodeError,
    ProgramCounterError,
    ProgramLoadError,
    StackOverflowError,
    StackUnderflowError,
)
from .machine import Machine
from .opcodes import Instruction, Opcode, decode

__version__ = "0.1.0"

__all__ = [
    "Chip8Error",
    "DecodeError",
    "Instruction",
    "Machine",
    "Opcode",
    "ProgramCounterError",
    "ProgramLoadError",
    "StackOverflowError",
    "StackUnderflowError",
    "decode",
]

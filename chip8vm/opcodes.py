"""Instruction decoding.

A 16-bit word is matched against four opcode families, each identified by
the bits that select it:

    0xFFFF  exact word        00E0, 00EE
    0xF000  top nibble        1nnn 2nnn 3xkk 4xkk 6xkk 7xkk Annn Bnnn Cxkk Dxyn
    0xF00F  top + low nibble  5xy0 8xy0..8xyE 9xy0
    0xF0FF  top + low byte    Ex9E ExA1 Fx07..Fx65

The families never overlap, so a word decodes to at most one ``Opcode``.
"""

import enum
from typing import NamedTuple, Optional


class Opcode(enum.Enum):
    CLS = "00E0"
    RET = "00EE"
    JP = "1nnn"
    CALL = "2nnn"
    SE_VX_KK = "3xkk"
    SNE_VX_KK = "4xkk"
    SE_VX_VY = "5xy0"
    LD_VX_KK = "6xkk"
    ADD_VX_KK = "7xkk"
    LD_VX_VY = "8xy0"
    OR = "8xy1"
    AND = "8xy2"
    XOR = "8xy3"
    ADD = "8xy4"
    SUB = "8xy5"
    SHR = "8xy6"
    SUBN = "8xy7"
    SHL = "8xyE"
    SNE_VX_VY = "9xy0"
    LD_I = "Annn"
    JP_V0 = "Bnnn"
    RND = "Cxkk"
    DRW = "Dxyn"
    SKP = "Ex9E"
    SKNP = "ExA1"
    LD_VX_DT = "Fx07"
    WAITKEY = "Fx0A"
    LD_DT_VX = "Fx15"
    LD_ST_VX = "Fx18"
    ADD_I_VX = "Fx1E"
    FONT = "Fx29"
    BCD = "Fx33"
    STORE = "Fx55"
    LOAD = "Fx65"


class Instruction(NamedTuple):
    op: Opcode
    word: int
    x: int
    y: int
    n: int
    kk: int
    nnn: int


# dispatch table, checked in this order
OPCODE_FAMILIES = [
    (0xFFFF, {
        0x00E0: Opcode.CLS,
        0x00EE: Opcode.RET,
    }),
    (0xF000, {
        0x1000: Opcode.JP,
        0x2000: Opcode.CALL,
        0x3000: Opcode.SE_VX_KK,
        0x4000: Opcode.SNE_VX_KK,
        0x6000: Opcode.LD_VX_KK,
        0x7000: Opcode.ADD_VX_KK,
        0xA000: Opcode.LD_I,
        0xB000: Opcode.JP_V0,
        0xC000: Opcode.RND,
        0xD000: Opcode.DRW,
    }),
    (0xF00F, {
        0x5000: Opcode.SE_VX_VY,
        0x8000: Opcode.LD_VX_VY,
        0x8001: Opcode.OR,
        0x8002: Opcode.AND,
        0x8003: Opcode.XOR,
        0x8004: Opcode.ADD,
        0x8005: Opcode.SUB,
        0x8006: Opcode.SHR,
        0x8007: Opcode.SUBN,
        0x800E: Opcode.SHL,
        0x9000: Opcode.SNE_VX_VY,
    }),
    (0xF0FF, {
        0xE09E: Opcode.SKP,
        0xE0A1: Opcode.SKNP,
        0xF007: Opcode.LD_VX_DT,
        0xF00A: Opcode.WAITKEY,
        0xF015: Opcode.LD_DT_VX,
        0xF018: Opcode.LD_ST_VX,
        0xF01E: Opcode.ADD_I_VX,
        0xF029: Opcode.FONT,
        0xF033: Opcode.BCD,
        0xF055: Opcode.STORE,
        0xF065: Opcode.LOAD,
    }),
]


def decode(word: int) -> Optional[Instruction]:
    """Decode an instruction word, or return None if no family matches."""
    word &= 0xFFFF
    for mask, patterns in OPCODE_FAMILIES:
        op = patterns.get(word & mask)
        if op is not None:
            return Instruction(
                op=op,
                word=word,
                x=(word >> 8) & 0xF,
                y=(word >> 4) & 0xF,
                n=word & 0xF,
                kk=word & 0xFF,
                nnn=word & 0x0FFF,
            )
    return None

"""
Unit tests for instruction decoding.

Usage:
  python -m pytest tests/test_opcodes.py -v
"""

import pytest

from chip8vm.opcodes import Opcode, decode


def sample_word(op):
    # "8xyE" -> 0x812E, "Dxyn" -> 0xD124
    text = op.value.replace("x", "1").replace("y", "2").replace("k", "3").replace("n", "4")
    return int(text, 16)


# =============================================================================
#  FIELD EXTRACTION
# =============================================================================

def test_fields_are_split_from_the_word():
    """x, y, n, kk and nnn come from the documented bit ranges."""
    ins = decode(0xD7A5)
    assert ins.op is Opcode.DRW
    assert ins.word == 0xD7A5
    assert ins.x == 0x7
    assert ins.y == 0xA
    assert ins.n == 0x5
    assert ins.kk == 0xA5
    assert ins.nnn == 0x7A5


# =============================================================================
#  FAMILIES
# =============================================================================

@pytest.mark.parametrize("op", list(Opcode))
def test_every_opcode_decodes_to_itself(op):
    """Each opcode pattern decodes back to its own variant."""
    assert decode(sample_word(op)).op is op


def test_exact_words():
    """00E0 and 00EE are matched on the whole word."""
    assert decode(0x00E0).op is Opcode.CLS
    assert decode(0x00EE).op is Opcode.RET


def test_low_nibble_selects_arithmetic():
    """8xy_ variants differ only in their low nibble."""
    assert decode(0x8AB4).op is Opcode.ADD
    assert decode(0x8AB5).op is Opcode.SUB
    assert decode(0x8ABE).op is Opcode.SHL


def test_low_byte_selects_f_family():
    assert decode(0xF30A).op is Opcode.WAITKEY
    assert decode(0xF333).op is Opcode.BCD
    assert decode(0xE3A1).op is Opcode.SKNP


# =============================================================================
#  UNKNOWN WORDS
# =============================================================================

@pytest.mark.parametrize("word", [
    0x0000,   # SYS calls are not supported
    0x0123,
    0x00E1,
    0x5121,   # 5xy0 needs a zero low nibble
    0x9121,
    0x8128,
    0x812F,
    0xE100,
    0xE193,
    0xF100,
    0xF1FF,
])
def test_unknown_words_decode_to_none(word):
    """Words outside all four families are rejected."""
    assert decode(word) is None

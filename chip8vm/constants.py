# CHIP-8 machine dimensions and fixed memory layout.
# Reference: Cowgod's CHIP-8 Technical Reference http://devernay.free.fr/hacks/chip8/C8TECH10.HTM

MEMORY_SIZE = 4096
PROGRAM_START = 0x200   # 0x000-0x1FF is reserved for the interpreter
NUM_REGISTERS = 16
STACK_SIZE = 16
NUM_KEYS = 16

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
ROW_MASK = (1 << DISPLAY_WIDTH) - 1

# set fonts (binary pixel patterns)
FONT_START = 0x000
FONT_BYTES_PER_DIGIT = 5
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
]  # notice 80 bytes

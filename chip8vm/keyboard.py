# Keyboard layout:
#   CHIP-8 keypad      physical keys
#   1 2 3 C            1 2 3 4
#   4 5 6 D            Q W E R
#   7 8 9 E            A S D F
#   A 0 B F            Z X C V

from pyglet.window import key

#map binding keys
KEYMAP = {
    key._1: 0x1, key._2: 0x2, key._3: 0x3, key._4: 0xC,
    key.Q: 0x4, key.W: 0x5, key.E: 0x6, key.R: 0xD,
    key.A: 0x7, key.S: 0x8, key.D: 0x9, key.F: 0xE,
    key.Z: 0xA, key.X: 0x0, key.C: 0xB, key.V: 0xF,
}


def logical_key(symbol):
    """Map a pyglet key symbol to a CHIP-8 key, or None if it is not on the keypad."""
    return KEYMAP.get(symbol)

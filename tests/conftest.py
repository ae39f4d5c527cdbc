import pytest

from chip8vm.machine import Machine


def assemble(*words):
    """Turn 16-bit instruction words into a big-endian program image."""
    return b"".join(w.to_bytes(2, "big") for w in words)


class FixedBytes:
    """Random source stub returning a fixed sequence of bytes, cycling."""

    def __init__(self, *values):
        self.values = list(values)
        self.calls = 0

    def __call__(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def make_machine():
    def factory(*words, random_byte=None):
        machine = Machine(random_byte=random_byte or FixedBytes(0))
        if words:
            machine.load_program(assemble(*words))
        return machine
    return factory

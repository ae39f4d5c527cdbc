"""
Tests for the pyglet window driver's clock bookkeeping.

The window is never opened: the platform close() is replaced so only the
scheduling logic runs. Skipped where pyglet's window module cannot load.
"""

import pytest

try:
    import pyglet
    from chip8vm.window import Chip8Window
except Exception as e:  # no windowing libraries on this machine
    pytest.skip("pyglet window unavailable: %s" % e, allow_module_level=True)

from chip8vm.errors import DecodeError
from chip8vm.machine import Machine

from conftest import assemble


@pytest.fixture
def window(monkeypatch):
    unscheduled = []
    monkeypatch.setattr(pyglet.window.Window, "close", lambda self: None)
    monkeypatch.setattr(pyglet.clock, "unschedule", unscheduled.append)

    w = Chip8Window.__new__(Chip8Window)
    w.machine = Machine()
    w.held = set()
    w.error = None
    w.unscheduled = unscheduled
    return w


def test_fault_unschedules_cpu_and_timers(window):
    """An unknown opcode stops the window and both clock callbacks."""
    window.machine.load_program(assemble(0x0123))
    window.tick(0)
    assert isinstance(window.error, DecodeError)
    assert window.tick in window.unscheduled
    assert window._timer_tick in window.unscheduled


def test_escape_unschedules_cpu_and_timers(window):
    window.on_key_press(pyglet.window.key.ESCAPE, 0)
    assert window.tick in window.unscheduled
    assert window._timer_tick in window.unscheduled


def test_keypad_press_is_held_and_queued(window):
    window.on_key_press(pyglet.window.key.W, 0)
    assert window.held == {0x5}
    assert window.machine.pending_keys == [0x5]
    window.on_key_release(pyglet.window.key.W, 0)
    assert window.held == set()

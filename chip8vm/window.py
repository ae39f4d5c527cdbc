# We're subclassing pyglet (it handles the window, keyboard and clock scheduling)
# and overriding whatever def we need from there. The CPU and the 60Hz timers run
# on two independent pyglet clock schedules.

import numpy as np
import pyglet

from . import config
from .config import log
from .errors import Chip8Error
from .keyboard import logical_key


class Chip8Window(pyglet.window.Window):

    def __init__(self, machine, settings=None):
        self.settings = settings or config.Config()
        width = self.settings.scale * 64
        height = self.settings.scale * 32
        super().__init__(
            width=width,
            height=height,
            caption=self.settings.caption,
            resizable=False,
            vsync=False,
        )

        self.machine = machine
        self.held = set()       # logical keys currently down
        self.error = None       # fault that stopped the program, if any

        # Pre-allocated RGBA image, upscaled with numpy.repeat on every redraw
        self.image = pyglet.image.ImageData(
            width,
            height,
            'RGBA',
            bytes(width * height * 4),
        )
        self.colours = np.array(
            [self.settings.background + (255,), self.settings.foreground + (255,)],
            dtype=np.uint8,
        )

        # Schedule the loops
        pyglet.clock.schedule_interval(self.tick, 1 / self.settings.clock_hz)
        pyglet.clock.schedule_interval(self._timer_tick, 1 / self.settings.timer_hz)

    # ---- CPU cycle ----
    def tick(self, dt):
        if self.error is not None:
            return
        try:
            self.machine.cycle(self.held)
        except Chip8Error as e:
            log("Emulation error:", e)
            self.error = e
            self.close()

    # ---- timers ----
    def _timer_tick(self, dt):
        self.machine.tick_timers()

    # ---- Drawing ----
    def render(self):
        """Return the scaled RGBA bytes for the current framebuffer."""
        # pyglet's origin is bottom-left, CHIP-8 row 0 is the top
        frame = self.machine.framebuffer()[::-1]
        rgba = self.colours[frame]
        scale = self.settings.scale
        if scale != 1:
            rgba = np.repeat(np.repeat(rgba, scale, axis=0), scale, axis=1)
        return rgba.tobytes()

    def on_draw(self):
        self.clear()
        self.image.set_data('RGBA', self.width * 4, self.render())
        self.image.blit(0, 0)

    # ---- Input ----
    def on_key_press(self, symbol, modifiers):
        #@Override
        if symbol == pyglet.window.key.ESCAPE:
            self.close()
            return
        if symbol == pyglet.window.key.F1:
            config.set_logging(not config.logs_on)
            print("logs_on:", config.logs_on)
            return
        k = logical_key(symbol)
        if k is not None:
            log("Key down:", hex(k))
            self.held.add(k)
            self.machine.record_key(k)

    def on_key_release(self, symbol, modifiers):
        #@Override
        k = logical_key(symbol)
        if k is not None:
            self.held.discard(k)

    def close(self):
        #@Override, on_close() ends up here too
        pyglet.clock.unschedule(self.tick)
        pyglet.clock.unschedule(self._timer_tick)
        super().close()

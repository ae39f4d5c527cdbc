import os

# ---- Configuration ----
scale = 10          # screen pixels per CHIP-8 pixel
cpu_hz = 600        # instructions per second
timer_HZ = 60       # delay/sound timer decrement rate
foreground = (0, 255, 0)
background = (0, 0, 0)
caption = "CHIP-8 Emulator"

# make it true if you want the logs (F1 toggles it while running)
logs_on = bool(os.environ.get("CHIP8_LOG"))


def log(*args):
    if logs_on:
        print(*args)


def set_logging(enabled):
    global logs_on
    logs_on = bool(enabled)
    return logs_on


class Config:
    """Driver settings: clock rates, magnification and colours."""

    def __init__(self, clock_hz=cpu_hz, timer_hz=timer_HZ, scale=scale,
                 foreground=foreground, background=background, caption=caption):
        if clock_hz <= 0 or timer_hz <= 0:
            raise ValueError("clock rates must be positive")
        if scale < 1:
            raise ValueError("scale must be at least 1")
        self.clock_hz = clock_hz
        self.timer_hz = timer_hz
        self.scale = scale
        self.foreground = tuple(foreground)
        self.background = tuple(background)
        self.caption = caption

    def __repr__(self):
        return "Config(clock_hz=%r, timer_hz=%r, scale=%r)" % (
            self.clock_hz, self.timer_hz, self.scale)

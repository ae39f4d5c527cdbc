"""
Tests for driver configuration and the switchable logger.
"""

import pytest

from chip8vm import config


@pytest.fixture(autouse=True)
def restore_logging():
    saved = config.logs_on
    yield
    config.set_logging(saved)


def test_defaults():
    settings = config.Config()
    assert settings.clock_hz == 600
    assert settings.timer_hz == 60
    assert settings.scale == 10
    assert settings.foreground == (0, 255, 0)
    assert settings.background == (0, 0, 0)


@pytest.mark.parametrize("kwargs", [
    {"clock_hz": 0},
    {"timer_hz": -60},
    {"scale": 0},
])
def test_rejects_bad_values(kwargs):
    with pytest.raises(ValueError):
        config.Config(**kwargs)


def test_log_only_prints_when_enabled(capsys):
    config.set_logging(False)
    config.log("hidden")
    assert capsys.readouterr().out == ""

    config.set_logging(True)
    config.log("Loading ROM:", "pong.ch8")
    assert capsys.readouterr().out == "Loading ROM: pong.ch8\n"

"""Pytest configuration and shared fixtures."""

import sys
from datetime import datetime

import pytest


def pytest_keyboard_interrupt(excinfo):
    """Handle Ctrl-C gracefully without verbose traceback."""
    print("\n\nTests interrupted by user (Ctrl-C)", file=sys.stderr)
    return None


class FakeClock:
    """Returns the given times in order, then keeps returning the last one."""

    def __init__(self, *times: datetime) -> None:
        if not times:
            raise ValueError("FakeClock requires at least one time value")
        self.times = list(times)
        self.calls = 0

    def __call__(self) -> datetime:
        index = min(self.calls, len(self.times) - 1)
        self.calls += 1
        return self.times[index]


@pytest.fixture
def fake_clock():
    """Factory fixture: ``fake_clock(t0, t1, ...)`` builds a FakeClock."""
    return FakeClock


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the stampy config file at a temp dir and clear env overrides."""
    config_file = tmp_path / "config" / "config.json"
    monkeypatch.setattr(
        "stampy.config.get_config_path", lambda: str(config_file)
    )
    monkeypatch.delenv("STAMPY_TEMPLATE", raising=False)
    monkeypatch.delenv("STAMPY_JSON_KEY", raising=False)
    return config_file

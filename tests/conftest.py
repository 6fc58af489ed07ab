"""Pytest fixtures for tests."""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from kubeblinkt.core import Controller, ResourceRegistry
from kubeblinkt.devices import MemoryDisplay
from kubeblinkt.models import ControllerConfig


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clock():
    """Fake clock for last-seen tracking."""
    return FakeClock()


@pytest.fixture
def registry(clock):
    """Empty registry on the fake clock."""
    return ResourceRegistry(clock=clock)


@pytest.fixture
def display():
    """In-memory display recording every call."""
    return MemoryDisplay()


@pytest.fixture
def config():
    """Default controller configuration."""
    return ControllerConfig()


@pytest.fixture
def controller(display, config, clock):
    """Controller drawing on the in-memory display."""
    return Controller(display, config, clock=clock)


def fill(controller, count: int, prefix: str = "r", color: str = "0000FF") -> list[str]:
    """Add ``count`` resources named r0, r1, ... and return their names."""
    names = [f"{prefix}{i}" for i in range(count)]
    for name in names:
        controller.add(name, color)
    return names

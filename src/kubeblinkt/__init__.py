"""kubeblinkt: show Kubernetes resources on a Blinkt! LED strip."""

__version__ = "0.1.0"

# Core engine
from .core import Controller

# Displays
from .devices import BlinktDisplay, MemoryDisplay

__all__ = [
    "BlinktDisplay",
    "Controller",
    "MemoryDisplay",
]

"""Display adapters for the LED strip."""

from .blinkt_output import BlinktDisplay
from .memory import DisplayCall, MemoryDisplay
from .protocols import OFF, DisplayAdapter

__all__ = [
    "OFF",
    "BlinktDisplay",
    "DisplayAdapter",
    "DisplayCall",
    "MemoryDisplay",
]

"""Protocol definitions for kubeblinkt."""

from .events import ResourceEvent
from .observers import ResourceObserver

__all__ = [
    "ResourceEvent",
    "ResourceObserver",
]

"""Data models for kubeblinkt."""

from .color import Color
from .config import CAPACITY, ControllerConfig, parse_duration
from .enums import EventType, ResourceState
from .events import WatchEvent
from .resource import Resource

__all__ = [
    "CAPACITY",
    # Models
    "Color",
    "ControllerConfig",
    # Enums
    "EventType",
    "Resource",
    "ResourceState",
    "WatchEvent",
    "parse_duration",
]

"""Watch event sources and the worker that applies them."""

from .kinds import ObjectKind, ResourceKind
from .stream import JsonStreamSource
from .worker import WatchWorker

__all__ = [
    "JsonStreamSource",
    "ObjectKind",
    "ResourceKind",
    "WatchWorker",
]

"""CLI commands for kubeblinkt."""

from .config import config
from .test import test
from .watch import watch

__all__ = ["config", "test", "watch"]

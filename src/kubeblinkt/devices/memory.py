"""In-memory display that records every call.

Used as the test double for the reconciler and by ``--dry-run``, where
committed frames are written to the log instead of the LEDs.
"""

import logging
import time
from dataclasses import dataclass

from kubeblinkt.models import CAPACITY

from .protocols import OFF

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisplayCall:
    """One recorded adapter call."""

    op: str
    index: int | None = None
    color: str | None = None
    brightness: float | None = None


class MemoryDisplay:
    """Frame buffer kept in memory, with a full call log."""

    def __init__(self, pixel_count: int = CAPACITY, realtime: bool = False):
        """
        Initialize the memory display.

        Args:
            pixel_count: Number of pixels in the frame
            realtime: If True, flash() sleeps like real hardware would
        """
        self.pixel_count = pixel_count
        self.realtime = realtime
        self.calls: list[DisplayCall] = []
        self._buffer: list[tuple[str, float]] = [(OFF, 0.0)] * pixel_count
        self.frame: list[tuple[str, float]] = list(self._buffer)
        self.frames_shown = 0
        self.cleaned_up = False

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.pixel_count:
            raise IndexError(f"Pixel index out of range: {index}")

    def set(self, index: int, color: str, brightness: float) -> None:
        """Buffer a pixel value."""
        self._check_index(index)
        self.calls.append(DisplayCall("set", index, color, brightness))
        self._buffer[index] = (color, brightness)

    def flash(
        self, index: int, color: str, brightness: float, repeat_count: int, interval: float
    ) -> None:
        """Record a flash; the pixel is left off."""
        self._check_index(index)
        self.calls.append(DisplayCall("flash", index, color, brightness))
        if self.realtime:
            time.sleep(2 * repeat_count * interval)
        self._buffer[index] = (OFF, 0.0)

    def show(self) -> None:
        """Commit the buffered frame."""
        self.calls.append(DisplayCall("show"))
        self.frame = list(self._buffer)
        self.frames_shown += 1
        logger.info("Frame: %s", " ".join(self.describe_frame()))

    def cleanup(self, final_color: str, brightness: float) -> None:
        """Record the shutdown flash and switch every pixel off."""
        self.calls.append(DisplayCall("cleanup", None, final_color, brightness))
        self._buffer = [(OFF, 0.0)] * self.pixel_count
        self.frame = list(self._buffer)
        self.cleaned_up = True
        logger.info("Display cleaned up")

    def describe_frame(self) -> list[str]:
        """Render the committed frame as 'COLOR@brightness' strings."""
        return [f"{color}@{brightness:.2f}" for color, brightness in self.frame]

    # Test helpers

    def flashes(self) -> list[tuple[int, str]]:
        """(index, color) for every recorded flash, in order."""
        return [(c.index, c.color) for c in self.calls if c.op == "flash"]

    def sets(self) -> list[tuple[int, str, float]]:
        """(index, color, brightness) for every recorded set, in order."""
        return [(c.index, c.color, c.brightness) for c in self.calls if c.op == "set"]

    def reset_calls(self) -> None:
        """Forget recorded calls, keeping the frame."""
        self.calls.clear()

"""Pimoroni Blinkt! output."""

import logging
import time
from collections.abc import Callable
from typing import Any

from kubeblinkt.exceptions import DisplayNotAvailableError, wrap_display_error
from kubeblinkt.models import CAPACITY, Color

logger = logging.getLogger(__name__)


def _load_driver() -> Any:
    """Import the blinkt library (needs RPi.GPIO, so only on a Raspberry Pi)."""
    try:
        import blinkt
    except (ImportError, RuntimeError) as e:
        raise DisplayNotAvailableError(str(e)) from e
    return blinkt


class BlinktDisplay:
    """Drive a Blinkt! strip through the ``blinkt`` library.

    Every driver exception is converted to DisplayError and propagated.
    """

    def __init__(self, driver: Any | None = None, sleep: Callable[[float], None] = time.sleep):
        """
        Initialize Blinkt output.

        Args:
            driver: Object exposing the blinkt module API (set_pixel, show, clear,
                    set_clear_on_exit). Loaded from the ``blinkt`` package if None.
            sleep: Sleep function used between flash toggles
        """
        self._driver = driver if driver is not None else _load_driver()
        self._sleep = sleep
        self.pixel_count = getattr(self._driver, "NUM_PIXELS", CAPACITY)

        # Strip goes dark if the process dies without reaching cleanup()
        self._call("initialize", self._driver.set_clear_on_exit, True)
        logger.info(f"Blinkt! display ready ({self.pixel_count} pixels)")

    def _call(self, operation: str, fn: Callable, *args, **kwargs) -> Any:
        try:
            return fn(*args, **kwargs)
        except Exception as e:
            logger.error(f"Blinkt! {operation} failed: {e}")
            raise wrap_display_error(e, operation) from e

    def _set_pixel(self, operation: str, index: int, color: Color, brightness: float) -> None:
        r, g, b = color.to_rgb_tuple()
        self._call(operation, self._driver.set_pixel, index, r, g, b, brightness)

    def set(self, index: int, color: str, brightness: float) -> None:
        """Buffer a pixel value."""
        try:
            parsed = Color.from_hex(color)
        except ValueError as e:
            raise wrap_display_error(e, "set") from e
        self._set_pixel("set", index, parsed, brightness)

    def flash(
        self, index: int, color: str, brightness: float, repeat_count: int, interval: float
    ) -> None:
        """Toggle one pixel on/off, leaving it off."""
        try:
            parsed = Color.from_hex(color)
        except ValueError as e:
            raise wrap_display_error(e, "flash") from e

        for _ in range(repeat_count):
            self._set_pixel("flash", index, parsed, brightness)
            self._call("flash", self._driver.show)
            self._sleep(interval)
            self._set_pixel("flash", index, Color.off(), 0.0)
            self._call("flash", self._driver.show)
            self._sleep(interval)

    def show(self) -> None:
        """Write the buffered frame to the strip."""
        self._call("show", self._driver.show)

    def cleanup(self, final_color: str, brightness: float, interval: float = 0.5) -> None:
        """Flash every pixel once with final_color, then switch the strip off."""
        try:
            parsed = Color.from_hex(final_color)
        except ValueError as e:
            raise wrap_display_error(e, "cleanup") from e

        for index in range(self.pixel_count):
            self._set_pixel("cleanup", index, parsed, brightness)
        self._call("cleanup", self._driver.show)
        self._sleep(interval)
        self._call("cleanup", self._driver.clear)
        self._call("cleanup", self._driver.show)
        logger.info("Blinkt! display switched off")

"""Display protocols and abstractions."""

from typing import Protocol, runtime_checkable

# Color used to switch a pixel off
OFF = "000000"


@runtime_checkable
class DisplayAdapter(Protocol):
    """
    Protocol for a fixed 8-pixel addressable strip.

    Colors are the opaque strings carried by resources (normally 6 hex
    digits). Any adapter failure must surface as DisplayError; callers do
    not retry.
    """

    def set(self, index: int, color: str, brightness: float) -> None:
        """
        Buffer a pixel value. Nothing reaches the hardware until show().

        Args:
            index: Pixel index (0-7)
            color: Color string, e.g. "00FF00"
            brightness: Brightness (0.0-1.0)
        """
        ...

    def flash(
        self, index: int, color: str, brightness: float, repeat_count: int, interval: float
    ) -> None:
        """
        Toggle a pixel on and off repeat_count times, blocking meanwhile.

        The pixel is left off. Callers set() the final value afterwards.

        Args:
            index: Pixel index (0-7)
            color: Color string shown while on
            brightness: Brightness (0.0-1.0)
            repeat_count: Number of on/off cycles
            interval: Delay between toggles (seconds)
        """
        ...

    def show(self) -> None:
        """Flush the buffered frame to the hardware."""
        ...

    def cleanup(self, final_color: str, brightness: float) -> None:
        """
        Flash every pixel once with final_color, then power the strip off.

        Called exactly once, at shutdown.
        """
        ...

"""Display-related exceptions.

A failed pixel write leaves the strip showing a half-written frame that
cannot be repaired in place, so these errors are never retried.
"""

from typing import Optional

from .base import KubeBlinktError


class DisplayError(KubeBlinktError):
    """LED strip I/O failed."""

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        operation: Optional[str] = None,
        recovery_hint: Optional[str] = None,
    ):
        """
        Initialize display error.

        Args:
            user_message: Message to show to users
            technical_message: Detailed message for logs
            operation: Display operation that failed (set, flash, show, cleanup)
            recovery_hint: Suggestion for how to fix the issue
        """
        super().__init__(
            user_message=user_message,
            technical_message=technical_message,
            recoverable=False,
            recovery_hint=recovery_hint,
        )
        self.operation = operation


class DisplayNotAvailableError(DisplayError):
    """The LED strip driver cannot be loaded on this machine."""

    def __init__(self, original_error: Optional[str] = None):
        """
        Initialize display-not-available error.

        Args:
            original_error: The import or GPIO error message
        """
        super().__init__(
            user_message="Blinkt! LED strip is not available.",
            technical_message=f"Failed to load blinkt driver: {original_error}",
            operation="initialize",
            recovery_hint=(
                "Install the hardware extra on the Raspberry Pi: "
                "pip install 'kubeblinkt[hardware]'\n"
                "Or run with --dry-run to log frames instead of driving LEDs."
            ),
        )
        self.original_error = original_error


def wrap_display_error(error: Exception, operation: str) -> DisplayError:
    """
    Convert a low-level driver exception into a DisplayError.

    Args:
        error: The original exception from the driver
        operation: Display operation that failed

    Returns:
        DisplayError describing the failure
    """
    if isinstance(error, DisplayError):
        return error

    return DisplayError(
        user_message=f"LED strip {operation} failed: {error}",
        technical_message=f"Display {operation} raised {type(error).__name__}: {error}",
        operation=operation,
        recovery_hint="Check the Blinkt! connection and GPIO permissions, then restart.",
    )

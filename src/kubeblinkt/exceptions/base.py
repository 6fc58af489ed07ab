"""Root of the kubeblinkt exception hierarchy.

Every error raised on purpose by kubeblinkt carries two messages: a short
one for the terminal and a detailed one for the log file. The CLI prints
``user_message`` and ``recovery_hint``; handlers log ``technical_message``.
"""

from typing import Optional


class KubeBlinktError(Exception):
    """
    Base exception for all kubeblinkt errors.

    Attributes:
        user_message: Short message shown on the terminal
        technical_message: Detailed message for the log (defaults to user_message)
        recoverable: False when the process has to stop (e.g. the strip failed)
        recovery_hint: What the user can do about it, if anything
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """User message followed by the recovery hint, if there is one."""
        if not self.recovery_hint:
            return self.user_message
        return f"{self.user_message}\n\nSuggestion: {self.recovery_hint}"

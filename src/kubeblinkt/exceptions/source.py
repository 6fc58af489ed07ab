"""Event source exceptions."""

from .base import KubeBlinktError


class EventSourceError(KubeBlinktError):
    """The watch stream cannot be read at all."""

    def __init__(self, source: str, reason: str):
        """
        Initialize event source error.

        Args:
            source: Description of the stream (file name or "<stdin>")
            reason: Why reading failed
        """
        super().__init__(
            user_message=f"Cannot read watch events from {source}",
            technical_message=f"Event source {source} failed: {reason}",
            recoverable=False,
            recovery_hint=(
                "Pipe a watch stream in, for example:\n"
                "  kubectl get pods -l blinkt=show --watch --output-watch-events -o json "
                "| kubeblinkt watch -"
            ),
        )
        self.source = source
        self.reason = reason

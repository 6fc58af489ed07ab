"""Background thread feeding one watch source into the controller."""

import logging
import threading
from collections.abc import Callable, Iterable
from typing import Optional

from kubeblinkt.core import Controller
from kubeblinkt.exceptions import DisplayError, KubeBlinktError
from kubeblinkt.models import EventType, WatchEvent

from .kinds import ResourceKind

logger = logging.getLogger(__name__)


class WatchWorker:
    """
    Drains one event source into the controller on a daemon thread.

    Events are handled strictly in order: each handler runs the mutator and
    any render pass (flashes included) before the next event is read.

    The worker stops when the source is exhausted, when stop() is called, or
    on a fatal error. A DisplayError or EventSourceError is recorded in
    ``error`` rather than raised, so the caller can decide how to exit.
    """

    def __init__(self, source: Iterable[WatchEvent], controller: Controller, kind: ResourceKind):
        """
        Initialize the worker.

        Args:
            source: Iterable of watch events (may block between events)
            controller: Controller to apply events to
            kind: Strategy extracting the name and color from each object
        """
        self.source = source
        self.controller = controller
        self.kind = kind
        self.error: Optional[Exception] = None
        self.events_handled = 0
        self._running = False
        self._thread: Optional[threading.Thread] = None
        self._on_finished: Optional[Callable[["WatchWorker"], None]] = None

    @property
    def is_running(self) -> bool:
        """Check if the worker thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def on_finished(self, callback: Callable[["WatchWorker"], None]) -> None:
        """
        Register a callback run on the worker thread when it exits.

        Args:
            callback: Function that receives this worker
        """
        self._on_finished = callback

    def start(self) -> None:
        """Start draining the source."""
        if self._running:
            logger.warning(f"{self.kind.label} watch worker is already running")
            return

        self._running = True
        self._thread = threading.Thread(
            target=self._run, name=f"watch-{self.kind.label.lower()}", daemon=True
        )
        self._thread.start()
        logger.debug(f"{self.kind.label} watch worker started")

    def stop(self, timeout: float = 1.0) -> None:
        """
        Stop after the event being handled, if any.

        A source blocked in a read cannot be interrupted; the daemon thread
        is abandoned after the timeout.
        """
        self._running = False
        self.join(timeout)
        logger.debug(f"{self.kind.label} watch worker stopped")

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the worker thread to exit."""
        if self._thread and self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout=timeout)

    def handle(self, event: WatchEvent) -> bool:
        """
        Apply one watch event to the controller.

        Returns:
            True if the strip was re-rendered

        Raises:
            DisplayError: If the strip cannot be written
        """
        name = self.kind.key(event.object)
        if name is None:
            logger.warning(f"Skipping {self.kind.label} {event.type.value} event without a name")
            return False

        if event.type is EventType.ADDED:
            changed = self.controller.add(name, self.kind.color(event.object))
            action = "added"
        elif event.type is EventType.MODIFIED:
            changed = self.controller.update(name, self.kind.color(event.object))
            action = "updated"
        else:
            changed = self.controller.delete(name)
            action = "deleted"

        if changed:
            logger.info(f"{self.kind.label} {name} {action}")
        else:
            logger.debug(f"{self.kind.label} {name} {action}: no change")
        return changed

    def _run(self) -> None:
        try:
            for event in self.source:
                if not self._running:
                    break
                self.handle(event)
                self.events_handled += 1
            else:
                logger.info(f"{self.kind.label} watch source exhausted")
        except DisplayError as e:
            self.error = e
            logger.error(f"{self.kind.label} watch worker stopped by display failure: {e}")
        except KubeBlinktError as e:
            self.error = e
            logger.error(f"{self.kind.label} watch worker stopped: {e}")
        except Exception as e:
            self.error = e
            logger.exception(f"Unexpected error in {self.kind.label} watch worker")
        finally:
            self._running = False
            if self._on_finished:
                try:
                    self._on_finished(self)
                except Exception as e:
                    logger.error(f"Error in watch worker finished callback: {e}")

    def __enter__(self):
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.stop()

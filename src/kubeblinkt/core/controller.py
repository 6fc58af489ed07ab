"""Controller tying the registry, the render pass and the strip together."""

import logging
import time
from collections.abc import Callable
from threading import Lock

from kubeblinkt.devices.protocols import DisplayAdapter
from kubeblinkt.exceptions import DisplayError, wrap_display_error
from kubeblinkt.model_manager import ObserverManager
from kubeblinkt.models import ControllerConfig
from kubeblinkt.protocols import ResourceObserver

from .reconciler import Reconciler, RenderReport
from .registry import ResourceRegistry

logger = logging.getLogger(__name__)


class Controller:
    """
    Mirrors tracked resources onto the strip.

    Every mutator applies the change to the registry and, when the registry
    reports a change, runs a full render pass before returning. Flashes
    block the caller, so the strip shows events in the order they arrived.

    Thread Safety:
        One lock covers the registry and the display, so several watch
        workers (e.g. pods and nodes) can share one strip with at most one
        render pass in flight. Observers are notified after the lock is
        released.

    Lifecycle:
        close() waits for an in-flight render pass, then runs the display
        cleanup exactly once. Mutators called after close() do nothing.
    """

    def __init__(
        self,
        display: DisplayAdapter,
        config: ControllerConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the controller.

        Args:
            display: Strip to draw on
            config: Controller configuration (defaults if None)
            clock: Time source for last-seen tracking (seconds)
        """
        self.config = config or ControllerConfig()
        self.display = display
        self.registry = ResourceRegistry(clock=clock)
        self.reconciler = Reconciler(self.registry, display, self.config)
        self._lock = Lock()
        self._closed = False
        self._observers = ObserverManager[ResourceObserver](observer_type_name="resource")

        logger.info(
            f"Starting the Blinkt controller (brightness={self.config.brightness}, "
            f"resync_period={self.config.resync_period})"
        )

    def register_observer(self, observer: ResourceObserver) -> None:
        """Register an observer to receive resource events."""
        self._observers.register(observer)

    def unregister_observer(self, observer: ResourceObserver) -> None:
        """Unregister an observer."""
        self._observers.unregister(observer)

    def add(self, name: str, color: str) -> bool:
        """
        Track a resource (or update it in place if already tracked).

        Returns:
            True if the strip was re-rendered

        Raises:
            DisplayError: If the strip cannot be written
        """
        return self._apply("add", self.registry.add, name, color)

    def update(self, name: str, color: str) -> bool:
        """
        Change a tracked resource's color. Unknown names are ignored.

        Returns:
            True if the strip was re-rendered

        Raises:
            DisplayError: If the strip cannot be written
        """
        return self._apply("update", self.registry.update, name, color)

    def delete(self, name: str) -> bool:
        """
        Remove a tracked resource (flashed out during the render pass).

        Returns:
            True if the strip was re-rendered

        Raises:
            DisplayError: If the strip cannot be written
        """
        return self._apply("delete", self.registry.delete, name)

    def render(self) -> RenderReport | None:
        """
        Run a render pass without a mutation.

        Refreshes every visible pixel and applies stale-entry eviction.

        Returns:
            The render report, or None if the controller is closed
        """
        with self._lock:
            if self._closed:
                return None
            report = self.reconciler.render()
        self._notify(report)
        return report

    def _apply(self, operation: str, mutator: Callable[..., bool], name: str, *args) -> bool:
        with self._lock:
            if self._closed:
                logger.warning(f"Ignoring {operation} {name}: controller is closed")
                return False

            if not mutator(name, *args):
                logger.debug(f"{operation} {name}: nothing to render")
                return False

            report = self.reconciler.render()

        self._notify(report)
        return True

    def _notify(self, report: RenderReport) -> None:
        for event, name in report.events:
            self._observers.notify("on_resource_event", event, name)

    @property
    def closed(self) -> bool:
        """Check if cleanup has run."""
        return self._closed

    def close(self) -> None:
        """
        Switch the strip off.

        Waits for an in-flight render pass, then flashes the final color and
        powers the strip down. Safe to call more than once; cleanup runs once.

        Raises:
            DisplayError: If the cleanup sequence fails
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            logger.info("Stopping the Blinkt controller")
            try:
                self.display.cleanup(self.config.final_color, self.config.brightness)
            except DisplayError:
                raise
            except Exception as e:
                raise wrap_display_error(e, "cleanup") from e
            finally:
                self._observers.clear()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

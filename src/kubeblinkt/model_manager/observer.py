"""Thread-safe observer registry.

Observers are called with a snapshot of the registry taken under the lock,
so callbacks may register or unregister observers without deadlocking.
"""

import logging
from collections.abc import Iterable
from threading import Lock
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=object)


class ObserverManager(Generic[T]):
    """
    Ordered set of observers implementing one callback protocol.

    Type Parameters:
        T: The observer protocol (e.g. ResourceObserver)

    A failing observer is logged and skipped. It never prevents later
    observers from being called, and never reaches the notifier.

    Example:
        ```python
        observers = ObserverManager[ResourceObserver](observer_type_name="resource")
        observers.register(EventEcho("Pod"))
        observers.notify("on_resource_event", ResourceEvent.ADDED, "web-1")
        ```
    """

    def __init__(self, lock: "Lock | None" = None, observer_type_name: str = "observer"):
        """
        Initialize the registry.

        Args:
            lock: Lock guarding the observer list (a new one if None)
            observer_type_name: Label for log messages (e.g. "resource")
        """
        self._observers: list[T] = []
        self._lock = lock or Lock()
        self._label = observer_type_name

    def register(self, observer: T) -> None:
        """Add an observer. Registering the same object twice has no effect."""
        with self._lock:
            if observer in self._observers:
                logger.debug(f"{self._label} observer already registered: {observer!r}")
                return
            self._observers.append(observer)
        logger.debug(f"Registered {self._label} observer: {observer!r}")

    def unregister(self, observer: T) -> None:
        """Remove an observer, warning if it was never registered."""
        with self._lock:
            try:
                self._observers.remove(observer)
            except ValueError:
                logger.warning(f"Cannot unregister unknown {self._label} observer: {observer!r}")
                return
        logger.debug(f"Unregistered {self._label} observer: {observer!r}")

    def notify(self, callback_name: str, *args: Any, **kwargs: Any) -> None:
        """
        Call ``callback_name`` on every observer, in registration order.

        Args:
            callback_name: Protocol method to call (e.g. 'on_resource_event')
            *args: Positional arguments for the callback
            **kwargs: Keyword arguments for the callback
        """
        self._dispatch(self.snapshot(), callback_name, args, kwargs)

    def snapshot(self) -> list[T]:
        """Current observers, copied under the lock."""
        with self._lock:
            return list(self._observers)

    def _dispatch(
        self, observers: Iterable[T], callback_name: str, args: tuple, kwargs: dict[str, Any]
    ) -> None:
        for observer in observers:
            callback = getattr(observer, callback_name, None)
            if callback is None:
                logger.error(f"{self._label} observer {observer!r} has no method '{callback_name}'")
                continue
            try:
                callback(*args, **kwargs)
            except Exception:
                logger.exception(f"{self._label} observer {observer!r} failed in {callback_name}")

    def clear(self) -> None:
        """Drop every observer."""
        with self._lock:
            dropped = len(self._observers)
            self._observers.clear()
        if dropped:
            logger.debug(f"Cleared {dropped} {self._label} observer(s)")

    def __contains__(self, observer: object) -> bool:
        with self._lock:
            return observer in self._observers

    def __len__(self) -> int:
        with self._lock:
            return len(self._observers)

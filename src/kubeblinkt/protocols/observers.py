"""Observer protocol definitions for domain-specific events."""

from typing import Protocol, runtime_checkable

from .events import ResourceEvent


@runtime_checkable
class ResourceObserver(Protocol):
    """
    Observer that receives resource lifecycle events from the Controller.
    """

    def on_resource_event(self, event: ResourceEvent, name: str) -> None:
        """
        Handle a resource lifecycle event.

        Args:
            event: What happened to the resource
            name: Resource name

        Threading:
            Called from a watch worker thread after the render pass has
            finished and the strip lock has been released.
        """
        ...

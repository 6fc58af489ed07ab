"""Ordered, name-keyed store of tracked resources."""

import logging
import time
from collections.abc import Callable, Iterator

from kubeblinkt.models import Resource, ResourceState

logger = logging.getLogger(__name__)


class ResourceRegistry:
    """
    Tracked resources in arrival order.

    Position in the registry is the pixel index: entry 0 is the
    longest-tracked resource still present. Entries past the strip capacity
    are tracked but not shown until earlier ones are removed.

    Each mutator returns True when a render pass is needed. Lookups are
    linear; a strip shows eight resources and tracks tens at most.

    Not thread-safe on its own. The Controller serializes access.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Initialize an empty registry.

        Args:
            clock: Source of last-seen timestamps (seconds)
        """
        self._resources: list[Resource] = []
        self._clock = clock

    def get(self, name: str) -> Resource | None:
        """Find a resource by name."""
        for resource in self._resources:
            if resource.name == name:
                return resource
        return None

    def add(self, name: str, color: str) -> bool:
        """
        Track a new resource, or update it if the name is already tracked.

        A repeated add never creates a second entry. It follows update()
        semantics and returns its result.

        Returns:
            True if a render pass is needed
        """
        if self.get(name) is not None:
            logger.debug(f"Resource {name} already tracked, updating in place")
            return self.update(name, color)

        self._resources.append(
            Resource(name=name, color=color, state=ResourceState.ADDED, last_seen=self._clock())
        )
        return True

    def update(self, name: str, color: str) -> bool:
        """
        Change the color of a tracked resource.

        Unknown names are ignored (never implicitly added). The last-seen
        time is refreshed even when the color is unchanged.

        Returns:
            True if the color changed
        """
        resource = self.get(name)
        if resource is None:
            return False

        resource.last_seen = self._clock()
        if resource.color == color:
            return False

        resource.color = color
        resource.state = ResourceState.UPDATED
        return True

    def delete(self, name: str) -> bool:
        """
        Mark a resource for removal.

        The entry stays in place until the next render pass flashes it out.

        Returns:
            True if the resource was tracked
        """
        resource = self.get(name)
        if resource is None:
            return False

        resource.state = ResourceState.DELETED
        return True

    def mark_stale(self, max_age: float) -> list[str]:
        """
        Mark every resource not seen for more than max_age seconds as deleted.

        Returns:
            Names of the resources newly marked
        """
        cutoff = self._clock() - max_age
        stale = []
        for resource in self._resources:
            if resource.is_deleted or resource.last_seen is None:
                continue
            if resource.last_seen < cutoff:
                resource.state = ResourceState.DELETED
                stale.append(resource.name)
        return stale

    def entry_at(self, index: int) -> Resource:
        """Resource at a registry position."""
        return self._resources[index]

    def remove_at(self, index: int) -> Resource:
        """Physically remove the resource at a position, shifting later entries down."""
        return self._resources.pop(index)

    def names(self) -> list[str]:
        """Resource names in arrival order."""
        return [resource.name for resource in self._resources]

    def __len__(self) -> int:
        return len(self._resources)

    def __iter__(self) -> Iterator[Resource]:
        return iter(list(self._resources))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

"""Domain events for observer pattern."""

from enum import Enum


class ResourceEvent(Enum):
    """Events emitted after a render pass changed what the strip shows."""

    ADDED = "added"        # Resource tracked for the first time
    UPDATED = "updated"    # Resource color changed
    DELETED = "deleted"    # Resource removed after a delete notification
    EVICTED = "evicted"    # Resource removed because it was not seen for 3 resync periods

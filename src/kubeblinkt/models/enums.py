"""Enumerations for kubeblinkt."""

from enum import Enum


class ResourceState(str, Enum):
    """Render state of a tracked resource."""

    ADDED = "added"  # First seen, needs an "added" flash
    UPDATED = "updated"  # Color changed, needs an "updated" flash
    DELETED = "deleted"  # Gone, flashed then removed during the next render
    UNCHANGED = "unchanged"  # Rendered, only refreshed


class EventType(str, Enum):
    """Kind of watch notification."""

    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    DELETED = "DELETED"

    @classmethod
    def _missing_(cls, value):
        # Accept lower-case and verb spellings ("add", "update", "delete")
        if isinstance(value, str):
            aliases = {
                "ADD": cls.ADDED,
                "ADDED": cls.ADDED,
                "UPDATE": cls.MODIFIED,
                "UPDATED": cls.MODIFIED,
                "MODIFIED": cls.MODIFIED,
                "DELETE": cls.DELETED,
                "DELETED": cls.DELETED,
            }
            return aliases.get(value.strip().upper())
        return None

"""Strategies that turn watched objects into (name, color) pairs."""

import logging
from typing import Any, Protocol, runtime_checkable

from kubeblinkt.models import Color

logger = logging.getLogger(__name__)


@runtime_checkable
class ResourceKind(Protocol):
    """Extracts the registry key and color from a watched object."""

    label: str

    def key(self, obj: dict[str, Any]) -> str | None:
        """Unique name of the object, or None if it has none."""
        ...

    def color(self, obj: dict[str, Any]) -> str:
        """Color the object should be shown in, as 6 upper-case hex digits."""
        ...


class ObjectKind:
    """
    Generic kind for Kubernetes-shaped objects.

    The name is read from ``metadata.name`` (falling back to a top-level
    ``name``). The color is read from the ``color_label`` label, then a
    top-level ``color`` field, then ``default_color``. A value that is not a
    hex color is logged and skipped, so one mislabelled object cannot stop
    the strip.

    Example:
        ```python
        pods = ObjectKind("Pod")
        nodes = ObjectKind("Node", color_label="blinktColor", default_color="FFFF00")
        ```
    """

    def __init__(
        self,
        label: str = "Pod",
        color_label: str = "blinktColor",
        default_color: str = "0000FF",
    ):
        """
        Initialize the kind.

        Raises:
            ValueError: If default_color is not a hex color
        """
        self.label = label
        self.color_label = color_label
        self.default_color = Color.from_hex(default_color).to_hex()

    def key(self, obj: dict[str, Any]) -> str | None:
        metadata = obj.get("metadata")
        name = metadata.get("name") if isinstance(metadata, dict) else None
        if not name:
            name = obj.get("name")
        if not isinstance(name, str) or not name:
            return None
        return name

    def color(self, obj: dict[str, Any]) -> str:
        metadata = obj.get("metadata")
        labels = metadata.get("labels") if isinstance(metadata, dict) else None
        candidates = []
        if isinstance(labels, dict):
            candidates.append((f"label {self.color_label}", labels.get(self.color_label)))
        candidates.append(("color field", obj.get("color")))

        for source, value in candidates:
            if not value:
                continue
            try:
                return Color.from_hex(str(value)).to_hex()
            except ValueError:
                logger.warning(
                    f"{self.label} {self.key(obj) or '<unnamed>'}: ignoring {source} "
                    f"{value!r}, not a hex color"
                )
        return self.default_color

    def __repr__(self) -> str:
        return f"ObjectKind(label={self.label!r}, color_label={self.color_label!r})"

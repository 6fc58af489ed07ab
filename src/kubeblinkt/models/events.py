"""Watch event model."""

from typing import Any

from pydantic import BaseModel, Field

from .enums import EventType


class WatchEvent(BaseModel):
    """One notification from a watch stream.

    Mirrors the Kubernetes watch event shape: ``{"type": "ADDED", "object": {...}}``.
    """

    type: EventType = Field(description="Notification kind")
    object: dict[str, Any] = Field(default_factory=dict, description="Watched object")

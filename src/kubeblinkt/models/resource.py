"""Resource model representing one tracked cluster entity."""

from pydantic import BaseModel, ConfigDict, Field

from .enums import ResourceState


class Resource(BaseModel):
    """A named entity (pod or node) mirrored onto the strip.

    ``color`` is an opaque string. The core only compares it for equality;
    display adapters interpret it.
    """

    model_config = ConfigDict(validate_assignment=True)

    name: str = Field(min_length=1, frozen=True, description="Unique key")
    color: str = Field(description="Opaque color value, normally 6 hex digits")
    state: ResourceState = Field(default=ResourceState.ADDED, description="Render state")
    last_seen: float | None = Field(
        default=None,
        description="Monotonic timestamp of the last add/update (TTL eviction only)",
    )
    displayed: bool = Field(
        default=False,
        description="Whether the resource has been shown on a pixel",
    )

    @property
    def is_deleted(self) -> bool:
        """Check if resource is waiting to be removed."""
        return self.state is ResourceState.DELETED

    @property
    def needs_transition(self) -> bool:
        """Check if resource should flash before its color is set."""
        return self.state in (ResourceState.ADDED, ResourceState.UPDATED)

"""Controller configuration model."""

import re
from datetime import timedelta
from pathlib import Path

from pydantic import BaseModel, Field, field_serializer, field_validator

from kubeblinkt.model_manager.persistence import PydanticPersistence

# Number of pixels on a Blinkt! strip
CAPACITY = 8

DEFAULT_CONFIG_PATH = Path.home() / ".kubeblinkt" / "config.json"

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ns|us|µs|ms|s|m|h)")
_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_HEX_COLOR = re.compile(r"^#?[0-9A-Fa-f]{6}$")


def parse_duration(value: str) -> timedelta:
    """
    Parse a Go-style duration string.

    Accepts sequences such as "30s", "5m", "1h30m" or "250ms". A bare
    number is read as seconds.

    Raises:
        ValueError: If the string is not a valid duration

    Example:
        >>> parse_duration("1m30s")
        datetime.timedelta(seconds=90)
    """
    text = value.strip()
    if not text:
        raise ValueError("Empty duration")

    try:
        return timedelta(seconds=float(text))
    except (ValueError, OverflowError):
        pass

    position = 0
    total = 0.0
    for match in _DURATION_PART.finditer(text):
        if match.start() != position:
            break
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        position = match.end()

    if position != len(text):
        raise ValueError(f"Invalid duration: {value!r} (expected e.g. '30s', '5m', '1h30m')")
    return timedelta(seconds=total)


class ControllerConfig(BaseModel):
    """Values consumed by the reconciliation core and the display."""

    brightness: float = Field(default=0.2, ge=0.0, le=1.0, description="Pixel brightness (0.0-1.0)")
    resync_period: timedelta | None = Field(
        default=None,
        description=(
            "Watch resync period. When set, entries not seen for three periods "
            "are evicted from the strip."
        ),
    )

    # Transition colors
    added_color: str = Field(default="00FF00", description="Flash color for new resources")
    updated_color: str = Field(default="000B87", description="Flash color for changed resources")
    removed_color: str = Field(default="FF0000", description="Flash color for deleted resources")
    final_color: str = Field(default="FF0000", description="Color flashed once at shutdown")

    # Flash timing
    flash_count: int = Field(default=2, ge=1, description="On/off toggles per flash")
    flash_interval: float = Field(default=0.05, gt=0.0, description="Delay between toggles (seconds)")

    @field_validator("resync_period", mode="before")
    @classmethod
    def validate_resync_period(cls, v):
        """Accept Go-style duration strings in addition to pydantic's formats."""
        if isinstance(v, str):
            if not v.strip():
                return None
            return parse_duration(v)
        return v

    @field_validator("resync_period")
    @classmethod
    def validate_positive_period(cls, v: timedelta | None) -> timedelta | None:
        """Resync period must be positive when given."""
        if v is not None and v <= timedelta(0):
            raise ValueError("resync_period must be greater than zero")
        return v

    @field_validator("added_color", "updated_color", "removed_color", "final_color")
    @classmethod
    def validate_hex_color(cls, v: str) -> str:
        """Ensure transition colors are 6 hex digits, normalized to upper case."""
        if not _HEX_COLOR.match(v):
            raise ValueError("color must be 6 hex digits, e.g. 'FF0000'")
        return v.lstrip("#").upper()

    @field_serializer("resync_period")
    def serialize_resync_period(self, period: timedelta | None) -> float | None:
        """Serialize resync period as seconds."""
        return period.total_seconds() if period is not None else None

    @property
    def capacity(self) -> int:
        """Number of physical pixels (fixed)."""
        return CAPACITY

    @property
    def eviction_age(self) -> float | None:
        """Seconds after which an unseen entry is treated as deleted."""
        if self.resync_period is None:
            return None
        return 3 * self.resync_period.total_seconds()

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "ControllerConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses ~/.kubeblinkt/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH

        return PydanticPersistence.load_json_or_default(path, cls)

    def with_overrides(self, **overrides) -> "ControllerConfig":
        """
        Return a validated copy with the given fields replaced.

        ``None`` values are ignored so unset CLI options keep file values.

        Raises:
            ConfigValidationError: If an override fails validation
        """
        updates = {key: value for key, value in overrides.items() if value is not None}
        if not updates:
            return self
        return PydanticPersistence.validate_data(
            {**self.model_dump(), **updates}, type(self), source="command line"
        )

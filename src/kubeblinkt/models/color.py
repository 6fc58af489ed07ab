"""Color model for LED control."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Color(BaseModel):
    """Standard 8-bit RGB color model.

    Resource colors travel through the core as opaque hex strings. Display
    adapters use this model to turn those strings into channel values.

    The model is frozen to ensure hashability.
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255, description="Red (0-255)")
    g: int = Field(ge=0, le=255, description="Green (0-255)")
    b: int = Field(ge=0, le=255, description="Blue (0-255)")

    @field_validator("r", "g", "b")
    @classmethod
    def validate_rgb(cls, v: int) -> int:
        """Ensure RGB values are in valid range."""
        if not 0 <= v <= 255:
            raise ValueError("RGB values must be between 0 and 255")
        return v

    @classmethod
    def off(cls) -> "Color":
        """Create off (black) color."""
        return cls(r=0, g=0, b=0)

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse a 6-hex-digit color string.

        A leading '#' is accepted, so both "00FF00" and "#00ff00" work.

        Raises:
            ValueError: If the string is not six hex digits

        Example:
            >>> Color.from_hex("000B87")
            Color(r=0, g=11, b=135)
        """
        digits = value.strip().lstrip("#")
        if len(digits) != 6:
            raise ValueError(f"Invalid hex color: {value!r}")
        try:
            r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
        except ValueError as e:
            raise ValueError(f"Invalid hex color: {value!r}") from e
        return cls(r=r, g=g, b=b)

    def to_rgb_tuple(self) -> tuple[int, int, int]:
        """Convert to RGB tuple."""
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        """Convert to the 6-digit upper-case form used by resources (e.g. 'FF0000')."""
        return f"{self.r:02X}{self.g:02X}{self.b:02X}"

    def scaled(self, brightness: float) -> "Color":
        """Return this color with every channel multiplied by brightness (0.0-1.0).

        Used by adapters for strips without a per-pixel brightness register.
        """
        brightness = min(1.0, max(0.0, brightness))
        return Color(
            r=round(self.r * brightness),
            g=round(self.g * brightness),
            b=round(self.b * brightness),
        )

"""Configuration errors.

Raised while loading ``~/.kubeblinkt/config.json`` or applying the
BRIGHTNESS / RESYNC_PERIOD overrides. Both are reported before the strip is
touched, so they are always recoverable by fixing the input and restarting.
"""

from typing import Any

from .base import KubeBlinktError

# Extra guidance keyed by a fragment of the failing field name
_FIELD_HINTS = {
    "brightness": "Brightness must be a number between 0.0 and 1.0 (BRIGHTNESS)",
    "resync": "Use a duration such as '30s', '5m' or '1h' (RESYNC_PERIOD)",
    "color": "Colors are 6 hex digits, e.g. 'FF0000'",
    "flash": "flash_count must be at least 1 and flash_interval above 0 seconds",
}


class ConfigurationError(KubeBlinktError):
    """Configuration is invalid or cannot be loaded."""


class ConfigFileInvalidError(ConfigurationError):
    """The configuration file is not readable JSON."""

    def __init__(self, file_path: str, parse_error: str):
        """
        Initialize config file invalid error.

        Args:
            file_path: Path to the config file
            parse_error: Parser or I/O error message
        """
        lowered = parse_error.lower()
        if "trailing comma" in lowered:
            user_msg = "Configuration file has a trailing comma"
            recovery = f"Remove the comma after the last entry in {file_path}"
        elif "empty" in lowered:
            user_msg = "Configuration file is empty"
            recovery = f"Delete {file_path} or recreate it with: kubeblinkt config init --force"
        else:
            user_msg = "Configuration file has invalid syntax"
            recovery = (
                f"Fix the JSON in {file_path}, or recreate it with: "
                "kubeblinkt config init --force"
            )

        super().__init__(
            user_message=user_msg,
            technical_message=f"Cannot parse {file_path}: {parse_error}",
            recoverable=True,
            recovery_hint=recovery,
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """A configuration value is out of range or malformed."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: str | None = None):
        """
        Initialize config validation error.

        Args:
            field: Field that failed validation
            value: The rejected value
            error_msg: Why it was rejected
            file_path: Config file path or override source, e.g. "command line"
        """
        hint_lines = [f"Check the '{field}' value"]
        if file_path:
            hint_lines.append(f"Config source: {file_path}")
        for fragment, hint in _FIELD_HINTS.items():
            if fragment in field.lower():
                hint_lines.append(hint)
                break

        super().__init__(
            user_message=f"Invalid configuration value for '{field}': {error_msg}",
            technical_message=f"Config validation failed for {field}={value!r}: {error_msg}",
            recoverable=True,
            recovery_hint="\n".join(hint_lines),
        )
        self.field = field
        self.value = value
        self.file_path = file_path

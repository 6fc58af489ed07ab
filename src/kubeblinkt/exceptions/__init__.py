"""
Custom exception hierarchy for kubeblinkt.

## Exception Hierarchy

```
KubeBlinktError (base)
├── DisplayError
│   └── DisplayNotAvailableError
├── ConfigurationError
│   ├── ConfigFileInvalidError
│   └── ConfigValidationError
└── EventSourceError
```

All custom exceptions inherit from `KubeBlinktError`, which provides
`user_message`, `technical_message`, `recoverable` and `recovery_hint`.

### Example: Strip write failure

```python
from kubeblinkt.exceptions import wrap_display_error

try:
    self._driver.show()
except Exception as e:
    raise wrap_display_error(e, "show") from e
```

A missing resource on update/delete is not an error: the registry reports
"no change" and the caller carries on.
"""

from .base import KubeBlinktError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .display import DisplayError, DisplayNotAvailableError, wrap_display_error
from .handlers import ErrorContext, format_error_for_display, wrap_pydantic_error
from .source import EventSourceError

__all__ = [
    "ConfigFileInvalidError",
    "ConfigValidationError",
    # Config
    "ConfigurationError",
    # Display
    "DisplayError",
    "DisplayNotAvailableError",
    "ErrorContext",
    # Source
    "EventSourceError",
    # Base
    "KubeBlinktError",
    # Handlers
    "format_error_for_display",
    "wrap_display_error",
    "wrap_pydantic_error",
]

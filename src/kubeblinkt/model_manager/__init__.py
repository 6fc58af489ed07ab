"""Model persistence and observer utilities.

- **PydanticPersistence**: load/validate/save Pydantic models as JSON
- **ObserverManager**: thread-safe generic observer list
"""

from kubeblinkt.model_manager.observer import ObserverManager
from kubeblinkt.model_manager.persistence import PydanticPersistence

__all__ = [
    "ObserverManager",
    "PydanticPersistence",
]

"""Shared utilities for Pydantic model persistence.

Loads and saves Pydantic models to/from JSON files, converting low-level
Pydantic/IO errors into user-friendly KubeBlinktError exceptions with
recovery hints.

Safety Features:
    - Atomic writes using temp file + rename
    - Only falls back to defaults when the file is missing
"""

import logging
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from kubeblinkt.exceptions import ConfigFileInvalidError, ConfigurationError, wrap_pydantic_error

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class PydanticPersistence:
    """
    Stateless Pydantic persistence operations.

    Example Usage:
        ```python
        config = PydanticPersistence.load_json(
            path=Path("config.json"),
            model_type=ControllerConfig
        )
        PydanticPersistence.save_json(data=config, path=Path("config.json"))
        ```

    Thread-Safety:
        All methods are thread-safe as they operate on function parameters
        and do not access shared mutable state.
    """

    @staticmethod
    def load_json(path: Path, model_type: type[T]) -> T:
        """
        Load and validate a Pydantic model from a JSON file.

        Args:
            path: Path to the JSON file to load
            model_type: The Pydantic model class to validate against

        Returns:
            Validated model instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigFileInvalidError: If the JSON syntax is invalid
            ConfigValidationError: If the JSON content fails Pydantic validation
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            json_content = path.read_text()

            if not json_content or not json_content.strip():
                raise ConfigFileInvalidError(str(path), "File is empty")

            model = model_type.model_validate_json(json_content)

            logger.debug(f"Loaded {model_type.__name__} from {path}")
            return model

        except ValidationError as e:
            logger.error(f"Validation error loading {model_type.__name__} from {path}: {e}")
            raise wrap_pydantic_error(e, str(path)) from e

        except ConfigurationError:
            raise

        except OSError as e:
            logger.error(f"Unexpected error loading {model_type.__name__} from {path}: {e}")
            raise ConfigFileInvalidError(str(path), f"Unexpected error: {e}") from e

    @staticmethod
    def load_json_or_default(path: Path, model_type: type[T]) -> T:
        """
        Load a model from JSON, or return a default if the file doesn't exist.

        Args:
            path: Path to the JSON file
            model_type: The Pydantic model class, built with its defaults if the file is missing

        Raises:
            ConfigFileInvalidError: If the file exists but has invalid JSON syntax
            ConfigValidationError: If the file exists but has invalid values

        Notes:
            Does not automatically save the default to disk.
        """
        try:
            return PydanticPersistence.load_json(path, model_type)
        except FileNotFoundError:
            logger.info(f"File not found: {path}, using default {model_type.__name__}")
            return model_type()

    @staticmethod
    def validate_data(data: dict[str, Any], model_type: type[T], source: str) -> T:
        """
        Validate a plain mapping (e.g. merged CLI/env overrides) against a model.

        Args:
            data: Field values to validate
            model_type: The Pydantic model class
            source: Where the values came from, used in error messages

        Raises:
            ConfigValidationError: If the values fail validation
        """
        try:
            return model_type.model_validate(data)
        except ValidationError as e:
            logger.error(f"Validation error for {model_type.__name__} from {source}: {e}")
            raise wrap_pydantic_error(e, source) from e

    @staticmethod
    def save_json(data: BaseModel, path: Path, indent: int = 2) -> None:
        """
        Save a Pydantic model to a JSON file with an atomic write.

        Args:
            data: The Pydantic model instance to save
            path: Path where the file should be saved
            indent: JSON indentation level (default: 2 spaces)

        Raises:
            OSError: If the file cannot be written (permission denied, disk full, etc.)
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        json_content = data.model_dump_json(indent=indent)

        # Atomic write: write to temp file first, then rename
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            temp_path.write_text(json_content, encoding="utf-8")
            temp_path.replace(path)
            logger.debug(f"Saved {type(data).__name__} to {path}")
        finally:
            if temp_path.exists():
                temp_path.unlink()

"""
Configuration validation utilities.

Reads environment values and converts them with clear error messages.
"""
import os
import warnings
from typing import Optional

from .exceptions import ConfigurationError

_TRUE_VALUES = {"1", "true", "yes", "on"}


def get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get optional environment variable.

    :param key: Environment variable name
    :param default: Default value if not set
    :return: Environment variable value or default
    """
    value = os.getenv(key, default)

    if value and _is_placeholder(value):
        # Warn but don't fail for optional configs
        warnings.warn(
            f"{key} appears to be a placeholder. Using default or None.",
            UserWarning
        )
        return default

    return value


def get_bool_env(key: str, default: bool = False) -> bool:
    """
    Get a boolean flag. Any of 1/true/yes/on (case-insensitive) is True.

    :param key: Environment variable name
    :param default: Value used when the variable is unset or empty
    """
    value = get_optional_env(key)
    if not value:
        return default
    return value.strip().lower() in _TRUE_VALUES


def get_int_env(key: str, default: int, minimum: int = 1) -> int:
    """
    Get an integer setting.

    :param key: Environment variable name
    :param default: Value used when the variable is unset or empty
    :param minimum: Smallest accepted value
    :return: Parsed integer
    :raises: ConfigurationError if the value is not an integer or below minimum
    """
    value = get_optional_env(key)
    if not value:
        return default

    try:
        parsed = int(value.strip())
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got '{value}'")

    if parsed < minimum:
        raise ConfigurationError(f"{key} must be at least {minimum}, got {parsed}")

    return parsed


def _is_placeholder(value: str) -> bool:
    """Check if value is a placeholder."""
    if not value:
        return False

    placeholder_patterns = [
        "your_",
        "placeholder",
        "xxx",
        "replace",
        "TODO",
    ]

    value_lower = value.lower()
    return any(pattern.lower() in value_lower for pattern in placeholder_patterns)


def validate_path(path: str, path_name: str, must_exist: bool = False) -> str:
    """
    Validate file/directory path.

    :param path: Path to validate
    :param path_name: Name of the path (for error messages)
    :param must_exist: Whether path must exist
    :return: Validated path
    :raises: ConfigurationError if invalid
    """
    if not path:
        raise ConfigurationError(f"{path_name} is required.")

    if must_exist and not os.path.exists(path):
        raise ConfigurationError(
            f"{path_name} does not exist: {path}\n"
            f"Set {path_name} or place gospel-library.db in the working directory."
        )

    return path

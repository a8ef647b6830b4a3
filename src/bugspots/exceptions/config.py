"""Configuration exceptions: invalid settings and unreadable config files."""

from pathlib import Path
from typing import Any

from .base import BugspotsError


class ConfigurationError(BugspotsError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value!r}",
            details={"key": key, "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class ConfigFileError(ConfigurationError):
    """Raised when a config file is missing or cannot be parsed."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid config file: {path}", details={"reason": reason})
        self.path = path
        self.reason = reason

"""Exception hierarchy for Bugspots."""

from .base import BugspotsError
from .config import (
    ConfigFileError,
    ConfigurationError,
    InvalidConfigurationError,
)
from .history import (
    HistoryError,
    HistoryUnavailableError,
    MalformedTimestampError,
    NoCommitsError,
)

__all__ = [
    "BugspotsError",
    "HistoryError",
    "HistoryUnavailableError",
    "NoCommitsError",
    "MalformedTimestampError",
    "ConfigurationError",
    "InvalidConfigurationError",
    "ConfigFileError",
]

"""Root of the Bugspots error hierarchy.

The command line catches ``BugspotsError`` and prints ``str(error)``, so
``details`` should carry whatever a user needs to act on the failure: the
git command that broke, the config key that was wrong.
"""

from typing import Dict, Optional


class BugspotsError(Exception):
    """Base exception for all Bugspots errors."""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({details_str})"

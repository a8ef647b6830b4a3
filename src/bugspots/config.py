"""Configuration loading and management for Bugspots.

Configuration sources are merged in priority order:
    1. Defaults (defined in HotspotConfig)
    2. Global config (~/.bugspots.toml)
    3. Project config (./bugspots.toml)
    4. Explicit config file
    5. Environment variables (BUGSPOTS_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(percentile=20.0)
    >>> config.percentile
    20.0
"""

from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, get_type_hints

from .exceptions import ConfigFileError, InvalidConfigurationError

# Matches commit messages such as "fixes #123", "Closed gh-45"
DEFAULT_PATTERN = r"\b(fix(e[sd])?|close[sd]?) (#|gh-)[1-9][0-9]*\b"

DEFAULT_MIN_COUNT = 0
DEFAULT_MAX_COUNT = sys.maxsize
DEFAULT_PERCENTILE = 10.0


def _require_type(key: str, value: Any, types: tuple) -> None:
    # bool is an int subclass; TOML true/false must not pass as a count
    if isinstance(value, bool) or not isinstance(value, types):
        names = " or ".join(t.__name__ for t in types)
        raise InvalidConfigurationError(key, value, f"must be {names}")


def validate_bounds(min_count: int, max_count: int, percentile: float) -> None:
    """Check top-fraction selection bounds.

    ``min_count > max_count`` is accepted: max_count wins when the two
    conflict.

    Raises:
        InvalidConfigurationError: If any bound has the wrong type or is out
            of range
    """
    _require_type("min_count", min_count, (int,))
    _require_type("max_count", max_count, (int,))
    _require_type("percentile", percentile, (int, float))
    if min_count < 0:
        raise InvalidConfigurationError("min_count", min_count, "must be non-negative")
    if max_count <= 0:
        raise InvalidConfigurationError("max_count", max_count, "must be positive")
    if not 0.0 < percentile <= 100.0:
        raise InvalidConfigurationError("percentile", percentile, "must be in (0, 100]")


@dataclass(frozen=True)
class HotspotConfig:
    """Configuration for a hotspot run.

    Attributes:
        pattern: Extended regular expression matched case-insensitively
            against commit messages to pick bug-fix commits
        min_count: Report at least this many hotspots (when available)
        max_count: Never report more than this many hotspots
        percentile: Share of the ranked list to report, in (0, 100]
        git_executable: Name or path of the git binary
        git_timeout: Seconds before a git query is abandoned (None = wait)
    """

    pattern: str = DEFAULT_PATTERN
    min_count: int = DEFAULT_MIN_COUNT
    max_count: int = DEFAULT_MAX_COUNT
    percentile: float = DEFAULT_PERCENTILE
    git_executable: str = "git"
    git_timeout: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        _require_type("pattern", self.pattern, (str,))
        if not self.pattern:
            raise InvalidConfigurationError("pattern", self.pattern, "must not be empty")
        try:
            re.compile(self.pattern)
        except re.error as e:
            raise InvalidConfigurationError("pattern", self.pattern, str(e))

        validate_bounds(self.min_count, self.max_count, self.percentile)

        _require_type("git_executable", self.git_executable, (str,))
        if not self.git_executable:
            raise InvalidConfigurationError(
                "git_executable", self.git_executable, "must not be empty"
            )
        if self.git_timeout is not None:
            _require_type("git_timeout", self.git_timeout, (int, float))
            if self.git_timeout <= 0:
                raise InvalidConfigurationError(
                    "git_timeout", self.git_timeout, "must be positive"
                )


def load_config(config_file: Optional[Path] = None, **overrides) -> HotspotConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values mean "not given" and are skipped.

    Returns:
        Validated HotspotConfig instance

    Raises:
        ConfigFileError: If a config file is invalid or missing
        InvalidConfigurationError: If a merged value is out of range
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".bugspots.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "bugspots.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigFileError(config_file, "file not found")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    merged.update({k: v for k, v in overrides.items() if v is not None})

    unknown = sorted(set(merged) - set(HotspotConfig.__dataclass_fields__))
    if unknown:
        raise InvalidConfigurationError(unknown[0], merged[unknown[0]], "unknown setting")

    return HotspotConfig(**merged)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from BUGSPOTS_* environment variables.

    Supported environment variables:
        BUGSPOTS_PATTERN: str
        BUGSPOTS_MIN_COUNT: int
        BUGSPOTS_MAX_COUNT: int
        BUGSPOTS_PERCENTILE: float
        BUGSPOTS_GIT_EXECUTABLE: str
        BUGSPOTS_GIT_TIMEOUT: float

    Returns:
        Dict of field_name -> parsed_value for any BUGSPOTS_* vars found.
    """
    type_hints = get_type_hints(HotspotConfig)

    result: dict[str, Any] = {}

    for field_name in HotspotConfig.__dataclass_fields__:
        env_key = f"BUGSPOTS_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        try:
            result[field_name] = _parse_env_value(env_value, type_hints[field_name])
        except ValueError as e:
            raise InvalidConfigurationError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    return value


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Accepts either top-level keys or a ``[bugspots]`` table.

    Raises:
        ConfigFileError: If TOML parsing fails
    """
    if sys.version_info >= (3, 11):
        import tomllib
    else:
        import tomli as tomllib

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigFileError(path, str(e))

    section = data.get("bugspots", data)
    if not isinstance(section, dict):
        raise ConfigFileError(path, "[bugspots] must be a table")
    return dict(section)

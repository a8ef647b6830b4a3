"""Public API for Bugspots.

Example:
    >>> from bugspots import analyze
    >>>
    >>> # Top 10% of hotspots, default bug-fix pattern
    >>> hotspots = analyze("/path/to/repo")
    >>>
    >>> # With customization
    >>> hotspots = analyze("/path/to/repo", percentile=25.0, max_count=50)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config import HotspotConfig, load_config
from .history.models import Hotspot
from .history.provider import GitHistoryProvider, HistoryProvider, PathLike
from .logging_config import get_logger
from .scoring import ScoreEngine
from .selection import SelectionBounds

logger = get_logger(__name__)


def analyze(
    path: PathLike = ".",
    config: Optional[HotspotConfig] = None,
    provider: Optional[HistoryProvider] = None,
    config_file: Optional[Path] = None,
    **overrides,
) -> list[Hotspot]:
    """Score a repository's files and return the reported top fraction.

    Args:
        path: Repository root (default: current directory)
        config: Ready-made configuration; when omitted it is loaded from
            config files, environment and ``overrides``
        provider: History source (default: git on ``PATH``)
        config_file: Optional explicit config file path
        **overrides: Configuration overrides (e.g. percentile=25.0)

    Returns:
        Hotspots sorted by descending score

    Raises:
        BugspotsError: If configuration is invalid or history can't be read
    """
    if config is None:
        config = load_config(config_file=config_file, **overrides)

    bounds = SelectionBounds(config.min_count, config.max_count, config.percentile)

    if provider is None:
        provider = GitHistoryProvider(config.git_executable, timeout=config.git_timeout)

    ranked = ScoreEngine(provider).compute(path, config.pattern)
    selected = bounds.apply(ranked)
    logger.debug("Reporting %d of %d hotspots", len(selected), len(ranked))
    return selected

"""
Bugspots - bug-fix hotspot finder for git repositories

Ranks the files of a repository by how much recent bug-fix activity touched
them. Fixes close to the latest commit weigh close to 1, old ones fade
towards 0, so the top of the list points at code that keeps breaking now.
"""

__version__ = "0.1.0"

from .api import analyze
from .config import DEFAULT_PATTERN, HotspotConfig, load_config
from .history import Commit, GitHistoryProvider, HistoryProvider, Hotspot
from .scoring import ScoreEngine, compute_hotspots
from .selection import SelectionBounds, select_top

__all__ = [
    "analyze",  # Main entry point
    "compute_hotspots",
    "select_top",
    "ScoreEngine",
    "SelectionBounds",
    "HotspotConfig",
    "load_config",
    "DEFAULT_PATTERN",
    "Commit",
    "Hotspot",
    "HistoryProvider",
    "GitHistoryProvider",
]

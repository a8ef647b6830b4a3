"""Cut a ranked hotspot list down to its reported top fraction."""

from dataclasses import dataclass
from typing import Sequence

from .config import DEFAULT_MAX_COUNT, DEFAULT_MIN_COUNT, DEFAULT_PERCENTILE, validate_bounds
from .history.models import Hotspot


@dataclass(frozen=True)
class SelectionBounds:
    """How many hotspots to report out of a ranked list.

    ``percentile`` picks a share of the list (rounded down), which is then
    clamped into ``[min_count, max_count]``. When ``min_count`` exceeds
    ``max_count`` the maximum wins; keeping them ordered is up to the caller.
    """

    min_count: int = DEFAULT_MIN_COUNT
    max_count: int = DEFAULT_MAX_COUNT
    percentile: float = DEFAULT_PERCENTILE

    def __post_init__(self) -> None:
        validate_bounds(self.min_count, self.max_count, self.percentile)

    def count(self, total: int) -> int:
        """Number of entries to report from a list of ``total`` hotspots."""
        share = int(self.percentile * total // 100)
        clamped = min(max(share, self.min_count), self.max_count)
        return min(clamped, total)

    def apply(self, hotspots: Sequence[Hotspot]) -> list[Hotspot]:
        """Leading entries of a list already sorted by descending score."""
        return list(hotspots[: self.count(len(hotspots))])


def select_top(
    hotspots: Sequence[Hotspot],
    min_count: int = DEFAULT_MIN_COUNT,
    max_count: int = DEFAULT_MAX_COUNT,
    percentile: float = DEFAULT_PERCENTILE,
) -> list[Hotspot]:
    """Top fraction of a descending hotspot list.

    Raises:
        InvalidConfigurationError: If the bounds are out of range
    """
    return SelectionBounds(min_count, max_count, percentile).apply(hotspots)

"""Tests for top-fraction hotspot selection."""

import sys

import pytest

from bugspots.exceptions import InvalidConfigurationError
from bugspots.history.models import Hotspot
from bugspots.selection import SelectionBounds, select_top


def ranked(n: int) -> list[Hotspot]:
    """n hotspots with strictly decreasing scores."""
    return [Hotspot(file=f"file{i}.py", score=float(n - i)) for i in range(n)]


class TestSelectTop:
    """Test select_top function."""

    def test_percentile_share(self):
        result = select_top(ranked(100), min_count=0, max_count=sys.maxsize, percentile=10)
        assert len(result) == 10

    def test_min_count_raises_share(self):
        result = select_top(ranked(100), min_count=20, max_count=sys.maxsize, percentile=10)
        assert len(result) == 20

    @pytest.mark.parametrize("percentile", [5, 10, 50, 100])
    def test_max_count_caps_share(self, percentile):
        result = select_top(ranked(100), min_count=0, max_count=5, percentile=percentile)
        assert len(result) == 5

    def test_share_below_max_not_padded(self):
        """max_count is a ceiling, never a target."""
        result = select_top(ranked(100), min_count=0, max_count=5, percentile=1)
        assert len(result) == 1

    def test_bool_bounds_rejected(self):
        with pytest.raises(InvalidConfigurationError) as exc_info:
            select_top(ranked(10), max_count=True)
        assert exc_info.value.key == "max_count"

    def test_takes_leading_entries(self):
        hotspots = ranked(50)
        assert select_top(hotspots, percentile=10) == hotspots[:5]

    def test_share_rounds_down(self):
        assert len(select_top(ranked(19), percentile=10)) == 1
        assert len(select_top(ranked(9), percentile=10)) == 0

    def test_whole_list(self):
        hotspots = ranked(37)
        assert select_top(hotspots, max_count=sys.maxsize, percentile=100) == hotspots

    def test_empty_list(self):
        assert select_top([], min_count=5, max_count=10, percentile=50) == []

    def test_min_count_beyond_list(self):
        """Can't report more than exists."""
        assert len(select_top(ranked(3), min_count=10, percentile=10)) == 3

    def test_max_wins_over_min(self):
        """min_count > max_count is allowed; max_count bounds the result."""
        assert len(select_top(ranked(100), min_count=30, max_count=7, percentile=10)) == 7

    def test_returns_new_list(self):
        hotspots = ranked(10)
        result = select_top(hotspots, percentile=100)
        result.clear()
        assert len(hotspots) == 10


class TestSelectionBounds:
    """Test SelectionBounds validation and counting."""

    def test_defaults(self):
        bounds = SelectionBounds()
        assert bounds.count(100) == 10
        assert bounds.count(0) == 0

    @pytest.mark.parametrize(
        "kwargs,key",
        [
            ({"min_count": -1}, "min_count"),
            ({"max_count": 0}, "max_count"),
            ({"max_count": -3}, "max_count"),
            ({"percentile": 0}, "percentile"),
            ({"percentile": -5}, "percentile"),
            ({"percentile": 100.5}, "percentile"),
        ],
    )
    def test_invalid_bounds(self, kwargs, key):
        with pytest.raises(InvalidConfigurationError) as exc_info:
            SelectionBounds(**kwargs)
        assert exc_info.value.key == key

    def test_invalid_bounds_rejected_before_selection(self):
        """Bad bounds fail even when there is nothing to select."""
        with pytest.raises(InvalidConfigurationError):
            select_top([], percentile=0)

    def test_fractional_percentile(self):
        assert SelectionBounds(percentile=2.5).count(200) == 5

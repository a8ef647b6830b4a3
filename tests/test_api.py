"""Tests for the public analyze() entry point."""

import pytest

from bugspots import analyze
from bugspots.config import HotspotConfig
from bugspots.exceptions import InvalidConfigurationError, NoCommitsError


def many_files_provider(make_provider, n=40):
    """Provider where file i was fixed i seconds into a 100s history."""
    files = [f"f{i:02d}.py" for i in range(n)]
    blocks = "\n\n".join(f"{i}\n{name}" for i, name in enumerate(files))
    return make_provider(head_files="\n".join(files), first="h\n0", last="h\n100", commits=blocks)


class TestAnalyze:
    """Test analyze function."""

    def test_default_selection(self, make_provider):
        """Default config reports the top 10%."""
        provider = many_files_provider(make_provider)
        result = analyze("/repo", config=HotspotConfig(), provider=provider)

        assert [h.file for h in result] == ["f39.py", "f38.py", "f37.py", "f36.py"]

    def test_config_bounds_applied(self, make_provider):
        provider = many_files_provider(make_provider)
        config = HotspotConfig(min_count=6, max_count=8, percentile=10.0)
        assert len(analyze("/repo", config=config, provider=provider)) == 6

    def test_overrides_without_config(self, make_provider, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.chdir(tmp_path)
        provider = many_files_provider(make_provider)
        result = analyze("/repo", provider=provider, percentile=50.0, max_count=3)
        assert len(result) == 3

    def test_pattern_forwarded(self, make_provider):
        provider = make_provider(head_files="a", commits="")
        analyze("/repo", config=HotspotConfig(pattern=r"\bbug\b"), provider=provider)
        assert provider.last_pattern == r"\bbug\b"

    def test_invalid_config_before_history(self, make_provider, monkeypatch, tmp_path):
        """Bad bounds fail without touching the repository."""
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.chdir(tmp_path)
        provider = make_provider()
        with pytest.raises(InvalidConfigurationError):
            analyze("/repo", provider=provider, percentile=0.0)
        assert provider.calls == []

    def test_history_error_propagates(self, make_provider):
        provider = make_provider(head_files="a", last="")
        with pytest.raises(NoCommitsError):
            analyze("/repo", config=HotspotConfig(), provider=provider)

    def test_no_fixes_no_hotspots(self, make_provider):
        provider = make_provider(head_files="a\nb", commits="")
        assert analyze("/repo", config=HotspotConfig(percentile=100), provider=provider) == []

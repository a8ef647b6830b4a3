"""Shared test fixtures for Bugspots."""

import os
import shutil
import subprocess

import pytest

from bugspots.exceptions import HistoryUnavailableError
from bugspots.history.provider import HistoryProvider


class FakeHistoryProvider(HistoryProvider):
    """Serves canned git output; an exception instance is raised instead."""

    def __init__(self, head_files="", first="hash\n0", last="hash\n100", commits=""):
        self.responses = {
            "head_files": head_files,
            "first": first,
            "last": last,
            "commits": commits,
        }
        self.calls = []

    def _respond(self, key, repo_path):
        self.calls.append((key, str(repo_path)))
        value = self.responses[key]
        if isinstance(value, Exception):
            raise value
        return value

    def list_files_at_head(self, repo_path):
        return self._respond("head_files", repo_path)

    def first_commit_timestamp(self, repo_path):
        return self._respond("first", repo_path)

    def last_commit_timestamp(self, repo_path):
        return self._respond("last", repo_path)

    def matching_commits(self, repo_path, pattern):
        self.last_pattern = pattern
        return self._respond("commits", repo_path)


@pytest.fixture
def make_provider():
    """Factory for FakeHistoryProvider instances."""
    return FakeHistoryProvider


@pytest.fixture
def unavailable():
    """A git failure as GitHistoryProvider would report it."""
    return HistoryUnavailableError(["git", "ls-files"], "not a git repository", returncode=128)


class GitRepo:
    """Temporary git repository with controllable commit times.

    Commit timestamps are offsets from ``epoch``.
    """

    epoch = 1_600_000_000

    def __init__(self, path):
        self.path = path
        path.mkdir(parents=True)
        self.git("init", "-q")
        self.git("config", "user.email", "test@test.com")
        self.git("config", "user.name", "Test")
        self.git("config", "commit.gpgsign", "false")

    def git(self, *args, timestamp=None):
        env = dict(os.environ)
        if timestamp is not None:
            date = f"@{self.epoch + timestamp} +0000"
            env["GIT_AUTHOR_DATE"] = date
            env["GIT_COMMITTER_DATE"] = date
        return subprocess.run(
            ["git", "-C", str(self.path), *args],
            capture_output=True,
            text=True,
            check=True,
            env=env,
        ).stdout

    def commit(self, message, timestamp, files=None, remove=()):
        """Write ``files`` (name -> content), delete ``remove``, commit all."""
        for name, content in (files or {}).items():
            target = self.path / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
        for name in remove:
            self.git("rm", "-q", name)
        self.git("add", "-A")
        self.git("commit", "-q", "--allow-empty", "-m", message, timestamp=timestamp)


@pytest.fixture
def git_repo(tmp_path):
    """Empty git repository; skipped when git isn't installed."""
    if shutil.which("git") is None:
        pytest.skip("git not found")
    return GitRepo(tmp_path / "repo")

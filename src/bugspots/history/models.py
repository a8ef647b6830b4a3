"""Data models for history facts and hotspot results."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Commit:
    timestamp: int  # unix seconds
    files: tuple[str, ...]  # paths touched, as recorded by git


@dataclass(frozen=True)
class HistoryFacts:
    """Everything the scorer needs from one repository, gathered in one pass."""

    head_files: list[str]
    first_commit: int  # unix seconds
    last_commit: int  # unix seconds
    bug_fix_commits: list[Commit]


@dataclass(frozen=True)
class Hotspot:
    file: str  # path relative to the repository root
    score: float  # sum of recency weights, always > 0

    def to_dict(self) -> dict:
        return {"file": self.file, "score": self.score}

"""Recency-weighted bug-fix scoring.

Each bug-fix commit contributes a weight to every head file it touched.
Commit times are mapped onto [0, 1] across the repository's lifetime and
pushed through a logistic curve, so fixes from the last stretch of history
dominate and old fixes fade towards zero:

    w(x) = 1 / (1 + e^(-12x + 12))
"""

from __future__ import annotations

from collections import defaultdict
from typing import Callable, Optional, TypeVar

import numpy as np

from .config import DEFAULT_PATTERN
from .exceptions import HistoryError
from .history.models import Commit, HistoryFacts, Hotspot
from .history.parsing import parse_commit_blocks, parse_file_list, parse_revision_record
from .history.provider import GitHistoryProvider, HistoryProvider, PathLike
from .logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

# Steepness of the decay curve; empirical
DECAY_STEEPNESS = 12.0


def normalize_timestamp(t: int, lo: int, hi: int) -> float:
    """Position of ``t`` within ``[lo, hi]``, 0.0 at ``lo`` and 1.0 at ``hi``.

    A zero-width range (single commit, or all commits sharing one second)
    places everything at 1.0, i.e. maximally recent.
    """
    if hi == lo:
        return 1.0
    return (t - lo) / (hi - lo)


def recency_weight(x: float) -> float:
    """Logistic decay weight for a normalized commit time."""
    return float(recency_weights(np.array([x]))[0])


def recency_weights(xs: np.ndarray) -> np.ndarray:
    """Vectorized :func:`recency_weight`."""
    return 1.0 / (1.0 + np.exp(-DECAY_STEEPNESS * xs + DECAY_STEEPNESS))


def score_files(
    head_files: list[str],
    commits: list[Commit],
    first_commit: int,
    last_commit: int,
) -> list[Hotspot]:
    """Rank head files by summed recency weight of the bug fixes touching them.

    Files without a matching fix are dropped. The result is sorted by
    descending score; ties keep ``head_files`` order.
    """
    if not head_files or not commits:
        return []

    positions = np.array(
        [normalize_timestamp(c.timestamp, first_commit, last_commit) for c in commits],
        dtype=float,
    )
    weights = recency_weights(positions).tolist()

    totals: dict[str, float] = defaultdict(float)
    for commit, weight in zip(commits, weights):
        for path in commit.files:
            totals[path] += weight

    hotspots = []
    for path in head_files:
        score = totals.get(path, 0.0)
        if score > 0.0:
            hotspots.append(Hotspot(file=path, score=score))

    # sorted() is stable, reverse=True included
    return sorted(hotspots, key=lambda h: h.score, reverse=True)


class ScoreEngine:
    """Gather history facts for a repository and score its files.

    Queries run one after another and the first failure aborts the run;
    no partial list is ever returned.
    """

    def __init__(self, provider: Optional[HistoryProvider] = None):
        self.provider = provider or GitHistoryProvider()

    def collect(self, repo_path: PathLike, pattern: str = DEFAULT_PATTERN) -> HistoryFacts:
        """Run the four history queries against ``repo_path``.

        Raises:
            HistoryError: Subclass describing the failure, with ``fact``
                set to the query that produced it.
        """
        head_files = self._fetch(
            "head_files",
            lambda: parse_file_list(self.provider.list_files_at_head(repo_path)),
        )
        first_commit = self._fetch(
            "first_commit",
            lambda: parse_revision_record(self.provider.first_commit_timestamp(repo_path)),
        )
        last_commit = self._fetch(
            "last_commit",
            lambda: parse_revision_record(self.provider.last_commit_timestamp(repo_path)),
        )
        commits = self._fetch(
            "bug_fix_commits",
            lambda: parse_commit_blocks(self.provider.matching_commits(repo_path, pattern)),
        )

        logger.debug(
            "%s: %d head files, %d bug-fix commits between %d and %d",
            repo_path,
            len(head_files),
            len(commits),
            first_commit,
            last_commit,
        )
        return HistoryFacts(
            head_files=head_files,
            first_commit=first_commit,
            last_commit=last_commit,
            bug_fix_commits=commits,
        )

    def compute(self, repo_path: PathLike, pattern: str = DEFAULT_PATTERN) -> list[Hotspot]:
        """Full descending hotspot list for ``repo_path``."""
        facts = self.collect(repo_path, pattern)
        hotspots = score_files(
            facts.head_files,
            facts.bug_fix_commits,
            facts.first_commit,
            facts.last_commit,
        )
        logger.info("Scored %d hotspots in %s", len(hotspots), repo_path)
        return hotspots

    @staticmethod
    def _fetch(fact: str, query: Callable[[], T]) -> T:
        try:
            return query()
        except HistoryError as e:
            e.attach_fact(fact)
            logger.debug("Could not obtain %s: %s", fact, e)
            raise


def compute_hotspots(
    repo_path: PathLike,
    pattern: str = DEFAULT_PATTERN,
    provider: Optional[HistoryProvider] = None,
) -> list[Hotspot]:
    """Score every head file of ``repo_path``; see :class:`ScoreEngine`."""
    return ScoreEngine(provider).compute(repo_path, pattern)

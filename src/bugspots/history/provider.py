"""Read-only history queries against a git repository via subprocess."""

import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from ..exceptions import HistoryUnavailableError
from ..logging_config import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]

# Takes a full argv and returns decoded stdout; raises HistoryUnavailableError
CommandRunner = Callable[[Sequence[str]], str]

# --diff-filter drops commits with no file changes recorded (e.g. plain merges)
_DIFF_FILTER = "--diff-filter=ACDMRTUXB"


def run_command(command: Sequence[str], timeout: Optional[float] = None) -> str:
    """Run a command and return its stdout, stripped of surrounding whitespace.

    Output is decoded as UTF-8 with surrogate escapes so that paths which
    aren't valid UTF-8 still compare byte-for-byte.

    Raises:
        HistoryUnavailableError: If the executable is missing, the command
            times out, or it exits non-zero.
    """
    logger.debug("Running %s", " ".join(command))
    try:
        result = subprocess.run(
            list(command),
            capture_output=True,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as e:
        logger.warning("%s not found", command[0])
        raise HistoryUnavailableError(command, f"executable not found: {e.filename or command[0]}")
    except subprocess.TimeoutExpired:
        logger.warning("%s timed out after %ss", " ".join(command), timeout)
        raise HistoryUnavailableError(command, f"timed out after {timeout}s")
    except OSError as e:
        raise HistoryUnavailableError(command, str(e))

    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        logger.warning("%s failed: %s", " ".join(command), stderr)
        raise HistoryUnavailableError(
            command, stderr or "non-zero exit status", returncode=result.returncode
        )

    return result.stdout.decode("utf-8", errors="surrogateescape").strip()


class HistoryProvider(ABC):
    """Source of the raw history text the scorer consumes.

    Every query takes the repository path explicitly; implementations must
    not rely on the process working directory.
    """

    @abstractmethod
    def list_files_at_head(self, repo_path: PathLike) -> str:
        """Newline-separated paths tracked at the current revision."""

    @abstractmethod
    def first_commit_timestamp(self, repo_path: PathLike) -> str:
        """Two-line record whose second line is the earliest commit time."""

    @abstractmethod
    def last_commit_timestamp(self, repo_path: PathLike) -> str:
        """Two-line record whose second line is the most recent commit time."""

    @abstractmethod
    def matching_commits(self, repo_path: PathLike, pattern: str) -> str:
        """Blank-line separated ``timestamp\\nfile...`` blocks for bug-fix commits."""


class GitHistoryProvider(HistoryProvider):
    """Run the history queries through the git command line."""

    def __init__(
        self,
        git_executable: str = "git",
        timeout: Optional[float] = None,
        runner: Optional[CommandRunner] = None,
    ):
        self.git_executable = git_executable
        self.timeout = timeout
        self._runner = runner or (lambda command: run_command(command, timeout=self.timeout))

    def _git(self, repo_path: PathLike, *args: str) -> str:
        # quotePath=false prints non-ASCII paths verbatim rather than C-quoted
        return self._runner(
            [self.git_executable, "-C", str(repo_path), "-c", "core.quotePath=false", *args]
        )

    def _head_record(self, repo_path: PathLike, *args: str) -> str:
        """Run ``rev-list <args> HEAD``; an unborn HEAD yields an empty listing."""
        try:
            return self._git(repo_path, "rev-list", *args, "HEAD")
        except HistoryUnavailableError:
            if self._is_unborn(repo_path):
                logger.debug("%s has no commits yet", repo_path)
                return ""
            raise

    def _is_unborn(self, repo_path: PathLike) -> bool:
        # --verify -q exits 1 for a missing ref inside a repository, 128 outside one
        try:
            self._git(repo_path, "rev-parse", "--verify", "-q", "HEAD")
        except HistoryUnavailableError as e:
            return e.returncode == 1
        return False

    def list_files_at_head(self, repo_path: PathLike) -> str:
        return self._git(repo_path, "ls-files")

    def first_commit_timestamp(self, repo_path: PathLike) -> str:
        raw = self._head_record(repo_path, "--max-parents=0", "--format=%ct")
        return _earliest_record(raw)

    def last_commit_timestamp(self, repo_path: PathLike) -> str:
        return self._head_record(repo_path, "--max-count=1", "--format=%ct")

    def matching_commits(self, repo_path: PathLike, pattern: str) -> str:
        return self._git(
            repo_path,
            "log",
            _DIFF_FILTER,
            "-E",
            "-i",
            f"--grep={pattern}",
            "--format=format:%ct",
            "--name-only",
        )


def _earliest_record(raw: str) -> str:
    """Reduce a multi-root ``rev-list`` listing to the earliest root's record.

    Histories that merged unrelated projects have several root commits.
    Anything that doesn't look like whole records is returned untouched and
    left for the parser to reject.
    """
    lines = raw.split("\n")
    if len(lines) <= 2 or len(lines) % 2:
        return raw

    records = [(lines[i], lines[i + 1]) for i in range(0, len(lines), 2)]
    if not all(ts.isdigit() for _, ts in records):
        return raw

    logger.debug("History has %d root commits, using the earliest", len(records))
    ident, ts = min(records, key=lambda record: int(record[1]))
    return f"{ident}\n{ts}"

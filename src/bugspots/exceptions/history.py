"""History-related exceptions: git execution failures and malformed records."""

from typing import Optional, Sequence

from .base import BugspotsError


class HistoryError(BugspotsError):
    """Base class for failures obtaining a fact from repository history.

    ``fact`` names the history query that failed (``head_files``,
    ``first_commit``, ``last_commit`` or ``bug_fix_commits``). Parsers
    don't know which query produced their input, so the scoring engine
    attaches it on the way out.
    """

    fact: Optional[str] = None

    def attach_fact(self, fact: str) -> "HistoryError":
        self.fact = fact
        self.details["fact"] = fact
        return self


class HistoryUnavailableError(HistoryError):
    """Raised when a history query cannot run or exits non-zero."""

    def __init__(
        self,
        command: Sequence[str],
        reason: str,
        returncode: Optional[int] = None,
    ):
        details = {"command": " ".join(command), "reason": reason}
        if returncode is not None:
            details["returncode"] = str(returncode)
        super().__init__("History query failed", details=details)
        self.command = list(command)
        self.reason = reason
        self.returncode = returncode


class NoCommitsError(HistoryError):
    """Raised when a revision query doesn't yield a two-line record."""

    def __init__(self, line_count: int):
        super().__init__(
            "No commits found",
            details={"lines": str(line_count), "expected": "2"},
        )
        self.line_count = line_count


class MalformedTimestampError(HistoryError):
    """Raised when a timestamp field is not a decimal integer."""

    def __init__(self, value: str):
        super().__init__(f"Invalid timestamp '{value}'")
        self.value = value

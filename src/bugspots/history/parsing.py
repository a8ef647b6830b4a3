"""Turn raw git output into structured history records.

Every parser here is pure; none of them knows which git command produced
its input.
"""

from .models import Commit
from ..exceptions import MalformedTimestampError, NoCommitsError


def _parse_timestamp(raw: str) -> int:
    # int() tolerates surrounding whitespace and underscores; git never emits those
    if not raw or raw != raw.strip() or "_" in raw:
        raise MalformedTimestampError(raw)
    try:
        return int(raw)
    except ValueError:
        raise MalformedTimestampError(raw) from None


def parse_file_list(raw: str) -> list[str]:
    """Split newline-separated paths (``git ls-files`` output)."""
    if raw == "":
        return []
    return raw.split("\n")


def parse_commit_blocks(raw: str) -> list[Commit]:
    """Parse ``git log --format=format:%ct --name-only`` output.

    Records are separated by a blank line. The first line of each record is
    the commit timestamp; the remaining lines are the files it touched.

    Raises:
        MalformedTimestampError: If any record has a non-integer timestamp.
            Nothing is returned for the batch in that case.
    """
    if raw == "":
        return []

    commits = []
    for block in raw.split("\n\n"):
        lines = block.split("\n")
        commits.append(Commit(timestamp=_parse_timestamp(lines[0]), files=tuple(lines[1:])))
    return commits


def parse_revision_record(raw: str) -> int:
    """Parse a two-line ``git rev-list --format=%ct`` record into a timestamp.

    Raises:
        NoCommitsError: If the record isn't exactly two lines
        MalformedTimestampError: If the second line isn't an integer
    """
    lines = raw.split("\n")
    if len(lines) != 2:
        raise NoCommitsError(len(lines))
    return _parse_timestamp(lines[1])

"""Repository history: git queries and the records parsed from them."""

from .models import Commit, HistoryFacts, Hotspot
from .parsing import parse_commit_blocks, parse_file_list, parse_revision_record
from .provider import GitHistoryProvider, HistoryProvider, run_command

__all__ = [
    "Commit",
    "HistoryFacts",
    "Hotspot",
    "HistoryProvider",
    "GitHistoryProvider",
    "run_command",
    "parse_file_list",
    "parse_commit_blocks",
    "parse_revision_record",
]

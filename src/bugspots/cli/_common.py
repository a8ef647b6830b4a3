"""Shared CLI helpers."""

import json
from typing import Sequence

from rich.console import Console

from ..history.models import Hotspot

console = Console()
err_console = Console(stderr=True)


def format_hotspot_line(hotspot: Hotspot) -> str:
    return f"{hotspot.score:.4f} {hotspot.file}"


def output_lines(hotspots: Sequence[Hotspot]) -> None:
    """One ``score path`` line per hotspot on stdout."""
    # Plain print: rich would reflow long paths and interpret brackets
    for hotspot in hotspots:
        print(format_hotspot_line(hotspot))


def output_json(hotspots: Sequence[Hotspot]) -> None:
    """Machine-readable JSON output."""
    print(json.dumps([h.to_dict() for h in hotspots], indent=2))

"""The bugspots command: score a repository and print its hotspots."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..api import analyze
from ..config import load_config
from ..exceptions import BugspotsError
from ..logging_config import setup_logging
from . import app
from ._common import err_console, output_json, output_lines


@app.command()
def main(
    path: Path = typer.Argument(
        Path("."),
        help="Repository to analyze",
        file_okay=False,
        dir_okay=True,
    ),
    pattern: Optional[str] = typer.Option(
        None,
        "--pattern",
        "-p",
        help="Regular expression matching bug-fix commit messages (case-insensitive)",
        show_default=False,
    ),
    min_count: Optional[int] = typer.Option(
        None,
        "--min-count",
        help="Report at least this many hotspots  [default: 0]",
        show_default=False,
    ),
    max_count: Optional[int] = typer.Option(
        None,
        "--max-count",
        help="Report at most this many hotspots  [default: unlimited]",
        show_default=False,
    ),
    percentile: Optional[float] = typer.Option(
        None,
        "--percentile",
        help="Share of ranked files to report, in (0, 100]  [default: 10]",
        show_default=False,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log each git query and intermediate counts",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Rank files by recency-weighted bug-fix activity.

    Bug-fix commits are those whose message matches the pattern (default:
    references like "fixes #123" or "closes gh-45"). Each fix adds a weight
    to every file it touched; fixes near the latest commit weigh close to 1,
    old ones close to 0.

    [bold cyan]Examples:[/bold cyan]

      bugspots

      bugspots /path/to/repo --percentile 25 --max-count 20

      bugspots --pattern "\\bbug\\b" --json
    """
    from .. import __version__

    if version:
        print(f"bugspots {__version__}")
        raise typer.Exit(0)

    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = load_config(
            config_file=config,
            pattern=pattern,
            min_count=min_count,
            max_count=max_count,
            percentile=percentile,
        )
        hotspots = analyze(path, config=settings)

    except BugspotsError as e:
        logger.debug(f"{e.__class__.__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False, soft_wrap=True)
        raise typer.Exit(1)

    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted[/yellow]")
        raise typer.Exit(130)

    if not hotspots:
        err_console.print("[yellow]No hotspots found.[/yellow]")
        if json_output:
            output_json(hotspots)
        raise typer.Exit(0)

    if json_output:
        output_json(hotspots)
    else:
        output_lines(hotspots)

"""CLI entry point, registers the bugspots command."""

import typer

app = typer.Typer(
    name="bugspots",
    help="Bugspots - find the files where recent bug fixes pile up",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import commands to register them
from .main import main as _main  # noqa: F401, E402

"""Shared CLI app objects and project helpers."""

from __future__ import annotations

import tempfile
from pathlib import Path

import typer
from rich.console import Console

from gdprscan.config import DB_FILENAME, PROJECT_MARKER, is_global_config_dir

app = typer.Typer(
    name="gdprscan",
    help="Client-side GDPR compliance scanner",
    no_args_is_help=True,
)
console = Console()

SEVERITY_STYLES = {
    "high": "red",
    "medium": "yellow",
    "low": "blue",
}


def get_project_dir() -> Path | None:
    """Find the project directory by looking for a .gdprscan marker.

    Stops walking at the system temp root (e.g. ``/tmp``) to avoid
    matching stale ``.gdprscan`` dirs left by test runs or throwaway work.
    """
    current = Path.cwd()
    try:
        temp_root = Path(tempfile.gettempdir()).resolve()
    except OSError:
        temp_root = None
    while current != current.parent:
        if temp_root and current.resolve() == temp_root:
            return None
        marker = current / PROJECT_MARKER
        if marker.exists():
            if (
                marker.is_dir()
                and is_global_config_dir(marker)
                and not (marker / DB_FILENAME).exists()
            ):
                current = current.parent
                continue
            return current
        current = current.parent
    return None


def require_project() -> Path:
    """Ensure the current directory is inside a gdprscan project."""
    project_dir = get_project_dir()
    if project_dir:
        return project_dir

    home_marker = Path.home() / PROJECT_MARKER
    if (
        home_marker.is_dir()
        and is_global_config_dir(home_marker)
        and not (home_marker / DB_FILENAME).exists()
    ):
        console.print(
            "[yellow]Note:[/yellow] ~/.gdprscan is a global config folder, not a project marker."
        )
    console.print("[red]Error: Not in a gdprscan project. Run 'gdprscan init' first.[/red]")
    raise typer.Exit(1)


def score_style(score: int) -> str:
    """Rich style for a compliance score."""
    if score >= 80:
        return "green"
    if score >= 60:
        return "yellow"
    return "red"

"""Project initialization CLI command."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.panel import Panel

from gdprscan.config import PROJECT_MARKER

from .deps import cli_module
from .shared import app, console


@app.command()
def init() -> None:
    """Initialize a scan history project in the current directory."""
    project_dir = Path.cwd()
    marker = project_dir / PROJECT_MARKER

    if marker.exists():
        console.print(f"[yellow]Project already initialized at {project_dir}[/yellow]")
        return

    try:
        (project_dir / "report").mkdir(exist_ok=True)
    except PermissionError as exc:
        console.print(
            "[red]Error: Cannot write to this directory.[/red]\n"
            "[dim]Choose a writable location and run 'gdprscan init' again.[/dim]"
        )
        raise typer.Exit(1) from exc

    cli = cli_module()
    try:
        storage_dir = cli.ensure_project_storage_dir(project_dir)
        write_test = storage_dir / ".write_test"
        write_test.write_text("ok")
        write_test.unlink()
    except PermissionError as exc:
        console.print(
            "[red]Error: Project directory is not writable.[/red]\n"
            "[dim]Choose a writable location and run 'gdprscan init' again.[/dim]"
        )
        raise typer.Exit(1) from exc
    except (OSError, ValueError) as exc:
        console.print(f"[red]Error initializing project storage: {exc}[/red]")
        raise typer.Exit(1) from exc

    db_path = cli.get_project_db_path(project_dir)
    cli.init_db(db_path)
    with cli.HistoryManager(db_path) as history:
        history.get_or_create_user(cli.get_user_email(project_dir))
    env_path = cli.create_project_config_template(project_dir)

    if storage_dir == marker:
        storage_text = "  .gdprscan/      - Config & scan history\n"
    else:
        storage_text = (
            "  .gdprscan       - Project marker\n"
            f"  data/           - Config & scan history ({storage_dir})\n"
        )

    console.print(
        Panel(
            f"[green]Initialized gdprscan project at[/green]\n{project_dir}\n\n"
            f"[dim]Structure:[/dim]\n"
            f"{storage_text}"
            f"  report/         - Generated reports\n\n"
            f"[yellow]Next steps:[/yellow]\n"
            f"  1. Optional settings: {env_path}\n"
            "  2. Scan a page: gdprscan scan https://example.com\n"
            "  3. Review: gdprscan history",
            title="gdprscan",
            border_style="green",
        )
    )

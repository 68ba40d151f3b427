"""History API server CLI command."""

from __future__ import annotations

import typer

from .deps import cli_module
from .shared import app, console


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(3000, "--port", help="Port to listen on"),
) -> None:
    """Serve the scan history API from this project's database."""
    cli = cli_module()
    project_dir = cli.require_project()
    db_path = cli.get_project_db_path(project_dir)
    if db_path is None:
        console.print("[red]Project storage not found. Run 'gdprscan init' first.[/red]")
        raise typer.Exit(1)

    api = cli.create_app(db_path, history_limit=cli.get_history_limit(project_dir))
    console.print(f"[green]History API listening on http://{host}:{port}/api[/green]")
    api.run(host=host, port=port)

"""Scan history and report CLI commands."""

from __future__ import annotations

import typer
from rich.table import Table

from gdprscan.modules.report import REPORT_FORMATS, ReportConfig

from .deps import cli_module
from .shared import app, console, score_style


@app.command()
def history(
    limit: int | None = typer.Option(None, "--limit", help="Number of scans to show"),
    user: str | None = typer.Option(None, "--user", help="Show scans for this email"),
) -> None:
    """Show the most recent scans stored in this project."""
    cli = cli_module()
    project_dir = cli.require_project()
    db_path = cli.get_project_db_path(project_dir)
    if db_path is None:
        console.print("[red]Project storage not found. Run 'gdprscan init' first.[/red]")
        raise typer.Exit(1)

    email = user or cli.get_user_email(project_dir)
    limit = limit if limit is not None else cli.get_history_limit(project_dir)

    with cli.HistoryManager(db_path) as manager:
        owner = manager.get_user_by_email(email)
        scans = manager.get_history(owner.id, limit=max(1, limit)) if owner else []

    if not scans:
        console.print(f"[dim]No scans recorded for {email}.[/dim]")
        return

    table = Table(title=f"Scan history for {email}")
    table.add_column("ID", justify="right")
    table.add_column("When", style="dim")
    table.add_column("URL")
    table.add_column("Score", justify="right")
    table.add_column("Violations", justify="right")
    for entry in scans:
        style = score_style(entry["score"])
        table.add_row(
            str(entry["id"]),
            (entry["createdAt"] or "")[:19].replace("T", " "),
            entry["url"],
            f"[{style}]{entry['score']}[/{style}]",
            str(len(entry["violations"])),
        )
    console.print(table)


@app.command()
def report(
    scan_id: int = typer.Argument(..., help="Stored scan id (see 'gdprscan history')"),
    format: str = typer.Option("text", "--format", help="Report format: text, html, json"),
) -> None:
    """Generate a compliance report for a stored scan."""
    cli = cli_module()
    project_dir = cli.require_project()

    if format not in REPORT_FORMATS:
        console.print(f"[red]Unsupported format: {format}. Use text, html or json.[/red]")
        raise typer.Exit(1)

    console.print(f"[blue]Generating {format.upper()} report...[/blue]")
    try:
        generator = cli.ReportGenerator(project_dir)
        try:
            report_file = generator.generate(scan_id, ReportConfig(format=format))
        finally:
            generator.close()
    except ValueError as exc:
        console.print(f"[red]Report generation failed: {exc}[/red]")
        raise typer.Exit(1) from exc

    console.print(f"[green]Report generated:[/green] {report_file}")

"""Scan CLI command."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer
from rich.table import Table

from gdprscan.errors import BackendError, DocumentUnavailableError, StorageError
from gdprscan.modules.scanner import ScanResult

from .deps import cli_module
from .shared import SEVERITY_STYLES, app, console, score_style


def print_result(result: ScanResult) -> None:
    """Render a scan result as a findings table plus suggestions."""
    style = score_style(result.score)
    console.print(f"\n[bold]GDPR compliance:[/bold] {result.url or '<snapshot>'}")
    console.print(f"Score: [{style}]{result.score}/100[/{style}]")
    console.print(
        f"[dim]{result.stats.rules_checked} rules checked, "
        f"{result.stats.total_cookies} cookies seen[/dim]\n"
    )

    if not result.findings:
        console.print("[green]No violations found.[/green]")
        return

    table = Table(title=f"Violations ({len(result.findings)})")
    table.add_column("Severity", style="bold")
    table.add_column("Rule")
    table.add_column("Description")
    for finding in result.findings:
        severity = finding.severity.value
        color = SEVERITY_STYLES.get(severity, "white")
        table.add_row(f"[{color}]{severity.upper()}[/{color}]", finding.rule_id, finding.description)
    console.print(table)

    if result.suggestions:
        console.print("\n[bold]Suggestions:[/bold]")
        for index, suggestion in enumerate(result.suggestions, 1):
            console.print(f"  {index}. {suggestion}")


async def push_result(cli, result: ScanResult, project_dir: Path | None, email: str) -> int:
    """Deliver ``result`` to the configured history API."""
    client = cli.BackendClient(
        cli.get_api_url(project_dir),
        timeout=cli.get_http_timeout(project_dir),
        token=cli.get_api_token(project_dir),
    )
    user_id = await client.register_user(email)
    return await client.save_scan(result, user_id)


@app.command()
def scan(
    url: str | None = typer.Argument(None, help="Page URL to fetch and scan"),
    snapshot: Path | None = typer.Option(
        None,
        "--snapshot",
        help="Scan a saved page snapshot (.html, .yml or .json) instead of fetching",
    ),
    save: bool = typer.Option(
        True,
        "--save/--no-save",
        help="Store the result in the project's scan history",
    ),
    push: bool = typer.Option(False, "--push", help="Also send the result to the history API"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    user: str | None = typer.Option(None, "--user", help="Record the scan under this email"),
) -> None:
    """Scan a page for GDPR compliance issues."""
    cli = cli_module()

    if (url is None) == (snapshot is None):
        console.print("[red]Provide either a URL or --snapshot FILE.[/red]")
        raise typer.Exit(1)

    project_dir = cli.get_project_dir()
    email = user or cli.get_user_email(project_dir)

    try:
        if snapshot is not None:
            document = cli.load_snapshot(snapshot)
        else:
            if not as_json:
                console.print(f"[blue]Fetching {url}...[/blue]")
            document = asyncio.run(cli.fetch_document(url, timeout=cli.get_http_timeout(project_dir)))
        engine = cli.RuleEngine(rule_budget_ms=cli.get_rule_budget_ms(project_dir))
        result = engine.scan(document)
    except DocumentUnavailableError as exc:
        console.print(f"[red]Scan failed: {exc}[/red]")
        raise typer.Exit(1) from exc

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        print_result(result)

    if save and project_dir is not None:
        db_path = cli.get_project_db_path(project_dir)
        try:
            with cli.HistoryManager(db_path) as history:
                user = history.get_or_create_user(email)
                scan_id = history.save_result(result, user.id)
        except (StorageError, ValueError) as exc:
            console.print(f"[red]Could not save scan: {exc}[/red]")
            raise typer.Exit(1) from exc
        if not as_json:
            console.print(f"\n[green]Saved as scan #{scan_id}[/green]")
    elif save and not as_json:
        console.print("\n[dim]Not in a gdprscan project; result not saved.[/dim]")

    if push:
        try:
            remote_id = asyncio.run(push_result(cli, result, project_dir, email))
        except BackendError as exc:
            console.print(f"[yellow]Could not deliver result to API: {exc}[/yellow]")
            return
        if not as_json:
            console.print(f"[green]Delivered to API as scan #{remote_id}[/green]")

"""Configuration CLI command."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
import yaml

from .deps import cli_module
from .shared import app, console, get_project_dir


def _mask_value(value: str) -> str:
    return value[:4] + "..." + value[-4:] if len(value) > 12 else "***"


def mask_secrets(data: Any, key: str = "") -> Any:
    """Return a copy of ``data`` with every token-like value masked."""
    if isinstance(data, dict):
        return {k: mask_secrets(v, str(k)) for k, v in data.items()}
    if isinstance(data, list):
        return [mask_secrets(item, key) for item in data]
    if "token" in key.lower() and data:
        return _mask_value(str(data))
    return data


def _print_effective_settings(project_dir: Path | None) -> None:
    cli = cli_module()
    token = cli.get_api_token(project_dir)
    console.print("\n[bold]Effective settings:[/bold]")
    console.print(f"  API URL: {cli.get_api_url(project_dir)}")
    console.print(f"  API token: {_mask_value(token) if token else '(not set)'}")
    console.print(f"  Rule budget: {cli.get_rule_budget_ms(project_dir)} ms")
    console.print(f"  HTTP timeout: {cli.get_http_timeout(project_dir)} s")
    console.print(f"  History limit: {cli.get_history_limit(project_dir)}")


@app.command()
def config(
    action: str = typer.Argument("show", help="Action: show, init"),
    global_config: bool = typer.Option(
        False,
        "--global",
        help="Use the global config instead of the project's",
    ),
) -> None:
    """Manage gdprscan configuration."""
    cli = cli_module()

    if action == "init":
        if global_config:
            config_path = cli.create_global_config()
            console.print(f"[green]Created global config:[/green] {config_path}")
            return

        project_dir = cli.require_project()
        env_path = cli.create_project_config_template(project_dir)
        console.print(f"[green]Created project config:[/green] {env_path}")
        console.print("[dim]Edit the file and uncomment the settings you want to change.[/dim]")
        return

    if action == "show":
        if global_config:
            config_data = mask_secrets(cli.load_global_config())
            console.print("[bold]Global Configuration (~/.gdprscan/config.yml):[/bold]")
            console.print(yaml.dump(config_data, default_flow_style=False))
            _print_effective_settings(None)
            return

        project_dir = get_project_dir()
        if not project_dir:
            console.print(
                "[yellow]Not in a project directory. Use --global to show global config.[/yellow]"
            )
            return

        env_config = cli.load_project_config(project_dir)
        if not env_config:
            console.print("[dim]No project config found. Run 'gdprscan config init'.[/dim]")
        else:
            env_path = cli.get_project_env_path(project_dir) or Path("unknown")
            console.print(f"[bold]Project Configuration ({env_path}):[/bold]")
            for key, value in mask_secrets(env_config).items():
                console.print(f"  {key}={value}")
        _print_effective_settings(project_dir)
        return

    console.print(f"[red]Unknown action: {action}. Use 'show' or 'init'.[/red]")
    raise typer.Exit(1)

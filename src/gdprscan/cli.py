"""gdprscan CLI - client-side GDPR compliance scanner."""

from __future__ import annotations

from gdprscan.api import create_app
from gdprscan.cli_commands import (  # noqa: F401
    config_command,
    history_command,
    project_init,
    rules_command,
    scan_command,
    serve_command,
)
from gdprscan.cli_commands.shared import app, console, get_project_dir, require_project
from gdprscan.config import (
    create_global_config,
    create_project_config_template,
    ensure_project_storage_dir,
    get_api_token,
    get_api_url,
    get_history_limit,
    get_http_timeout,
    get_project_db_path,
    get_project_env_path,
    get_rule_budget_ms,
    get_user_email,
    load_global_config,
    load_project_config,
)
from gdprscan.db.init import init_db
from gdprscan.modules.document import fetch_document, load_snapshot
from gdprscan.modules.history import HistoryManager
from gdprscan.modules.report import ReportGenerator
from gdprscan.modules.scanner import RuleEngine
from gdprscan.tools.http import BackendClient

__all__ = [
    "BackendClient",
    "HistoryManager",
    "ReportGenerator",
    "RuleEngine",
    "app",
    "console",
    "create_app",
    "create_global_config",
    "create_project_config_template",
    "ensure_project_storage_dir",
    "fetch_document",
    "get_api_token",
    "get_api_url",
    "get_history_limit",
    "get_http_timeout",
    "get_project_db_path",
    "get_project_dir",
    "get_project_env_path",
    "get_rule_budget_ms",
    "get_user_email",
    "init_db",
    "load_global_config",
    "load_project_config",
    "load_snapshot",
    "main",
    "require_project",
    "version",
]


@app.command()
def version() -> None:
    """Show the installed gdprscan version."""
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as pkg_version

    try:
        current_version = pkg_version("gdprscan")
    except PackageNotFoundError:
        current_version = "0.0.0+unknown"

    console.print(f"gdprscan {current_version}")


def main() -> None:
    """Entry point for the CLI."""
    app()

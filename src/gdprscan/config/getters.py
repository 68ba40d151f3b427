"""Configuration getter functions."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from .env_loader import load_global_config, load_project_config

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3000/api"
DEFAULT_USER_EMAIL = "local@gdprscan"
DEFAULT_RULE_BUDGET_MS = 250.0
DEFAULT_HISTORY_LIMIT = 100
DEFAULT_HTTP_TIMEOUT = 30.0

# Global config.yml nests settings; map flat keys onto those sections
GLOBAL_KEY_PATHS = {
    "GDPRSCAN_API_URL": ("api", "url"),
    "GDPRSCAN_API_TOKEN": ("api", "token"),
    "GDPRSCAN_USER_EMAIL": ("user", "email"),
    "GDPRSCAN_RULE_BUDGET_MS": ("scan", "rule_budget_ms"),
    "GDPRSCAN_HTTP_TIMEOUT": ("scan", "timeout"),
    "GDPRSCAN_HISTORY_LIMIT": ("history", "limit"),
}


def _lookup_global(global_config: dict[str, Any], key: str) -> Any:
    if key in global_config:
        return global_config[key]
    path = GLOBAL_KEY_PATHS.get(key)
    if not path:
        return None
    node: Any = global_config
    for part in path:
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node


def get_config(key: str, project_dir: Path | None = None, default: Any = None) -> Any:
    """
    Get configuration value with priority:
    1. Environment variable
    2. Project .env file
    3. Global config file
    4. Default value

    Args:
        key: Configuration key
        project_dir: Optional project directory
        default: Default value if not found

    Returns:
        Configuration value or default
    """
    # 1. Check environment variable
    env_value = os.environ.get(key)
    if env_value:
        return env_value

    # 2. Check project .env file
    project_config = load_project_config(project_dir)
    if key in project_config:
        return project_config[key]

    # 3. Check global config
    value = _lookup_global(load_global_config(), key)
    if value is not None:
        return value

    # 4. Return default
    return default


def _get_number(key: str, project_dir: Path | None, default: float) -> float:
    raw = get_config(key, project_dir, default=default)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-numeric %s=%r, using %s", key, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%r, using %s", key, raw, default)
        return default
    return value


def get_api_url(project_dir: Path | None = None) -> str:
    """Get the history API base URL."""
    return str(get_config("GDPRSCAN_API_URL", project_dir, default=DEFAULT_API_URL))


def get_api_token(project_dir: Path | None = None) -> str | None:
    """Get the bearer token sent to the history API, if any."""
    return get_config("GDPRSCAN_API_TOKEN", project_dir)


def get_user_email(project_dir: Path | None = None) -> str:
    """Get the email scans are recorded under."""
    return str(get_config("GDPRSCAN_USER_EMAIL", project_dir, default=DEFAULT_USER_EMAIL))


def get_rule_budget_ms(project_dir: Path | None = None) -> float:
    """Get the per-rule time budget in milliseconds."""
    return _get_number("GDPRSCAN_RULE_BUDGET_MS", project_dir, DEFAULT_RULE_BUDGET_MS)


def get_http_timeout(project_dir: Path | None = None) -> float:
    """Get the page fetch / API timeout in seconds."""
    return _get_number("GDPRSCAN_HTTP_TIMEOUT", project_dir, DEFAULT_HTTP_TIMEOUT)


def get_history_limit(project_dir: Path | None = None) -> int:
    """Get how many scans history listings return."""
    return int(_get_number("GDPRSCAN_HISTORY_LIMIT", project_dir, DEFAULT_HISTORY_LIMIT))

"""Environment variable and configuration file loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

GLOBAL_CONFIG_DIRNAME = ".gdprscan"


def global_config_dir() -> Path:
    """Return the global ~/.gdprscan config directory."""
    return Path.home() / GLOBAL_CONFIG_DIRNAME


def is_global_config_dir(path: Path) -> bool:
    """Return True if the path is the global ~/.gdprscan config directory."""
    home_config = global_config_dir()
    try:
        return path.resolve() == home_config.resolve()
    except FileNotFoundError:
        return path == home_config


def load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from .env file."""
    env_vars = {}
    if env_path.exists():
        with open(env_path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    # Remove quotes if present
                    value = value.strip().strip("\"'")
                    env_vars[key.strip()] = value
    return env_vars


def load_global_config() -> dict[str, Any]:
    """Load global configuration from ~/.gdprscan/config.yml."""
    config_path = global_config_dir() / "config.yml"
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    return {}


def load_project_config(project_dir: Path | None = None) -> dict[str, str]:
    """Load project-specific configuration from .env file."""
    if project_dir is None:
        from gdprscan.cli_commands.shared import get_project_dir

        project_dir = get_project_dir()

    if project_dir:
        from gdprscan.config.project_setup import get_project_env_path

        env_path = get_project_env_path(project_dir)
        if env_path:
            return load_env_file(env_path)

    return {}

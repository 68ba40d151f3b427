"""Project storage directory and config file setup."""

from __future__ import annotations

import hashlib
import logging
import os
import re
from pathlib import Path

from .env_loader import global_config_dir, is_global_config_dir

logger = logging.getLogger(__name__)

PROJECT_MARKER = ".gdprscan"
DB_FILENAME = "gdprscan.db"


def _storage_name(project_dir: Path) -> str:
    slug = re.sub(r"[^a-zA-Z0-9_-]+", "-", project_dir.name).strip("-") or "project"
    digest = hashlib.sha1(str(project_dir).encode()).hexdigest()[:8]
    return f"{slug}-{digest}"


def get_project_storage_dir(project_dir: Path | None) -> Path | None:
    """Resolve the storage directory for a project (.gdprscan or data dir)."""
    if project_dir is None:
        return None

    marker = project_dir / PROJECT_MARKER
    if marker.is_file():
        try:
            target = marker.read_text().strip()
            if target:
                return Path(target)
        except (FileNotFoundError, PermissionError, UnicodeDecodeError, OSError) as e:
            logger.warning(
                "Could not read project storage path from marker %s: %s",
                marker,
                e,
                exc_info=True,
            )
            return None

    if marker.is_dir():
        # Avoid treating the global ~/.gdprscan config dir as a project marker.
        if is_global_config_dir(marker) and not (marker / DB_FILENAME).exists():
            return None
        return marker

    data_root = os.environ.get("GDPRSCAN_DATA_DIR")
    if data_root:
        return Path(data_root) / _storage_name(project_dir)

    return marker


def ensure_project_storage_dir(project_dir: Path) -> Path:
    """Ensure the project storage directory exists and return it."""
    marker = project_dir / PROJECT_MARKER
    if marker.is_dir():
        return marker

    if marker.is_file():
        target = marker.read_text().strip()
        if not target:
            raise ValueError("Project marker file is empty.")
        storage = Path(target)
        storage.mkdir(parents=True, exist_ok=True)
        return storage

    storage = get_project_storage_dir(project_dir)
    if storage is None:
        raise ValueError("Unable to resolve project storage directory.")

    storage.mkdir(parents=True, exist_ok=True)

    # If using a data dir, create marker file in project dir
    if storage != marker:
        marker.write_text(str(storage))
    else:
        marker.mkdir(exist_ok=True)

    return storage


def get_project_db_path(project_dir: Path | None) -> Path | None:
    """Get the project database path."""
    storage = get_project_storage_dir(project_dir)
    if storage is None:
        return None
    return storage / DB_FILENAME


def get_project_env_path(project_dir: Path | None) -> Path | None:
    """Get the project .env path."""
    storage = get_project_storage_dir(project_dir)
    if storage is None:
        return None
    return storage / ".env"


def create_project_config_template(project_dir: Path) -> Path:
    """Create a .env template file in the project storage directory."""
    storage_dir = ensure_project_storage_dir(project_dir)
    env_path = storage_dir / ".env"

    if not env_path.exists():
        template = """# gdprscan project configuration
# Uncomment and fill in your values

# History API that `gdprscan scan --push` delivers results to
# GDPRSCAN_API_URL=http://localhost:3000/api
# GDPRSCAN_API_TOKEN=your-token-here

# Email scans are recorded under
# GDPRSCAN_USER_EMAIL=you@example.com

# Warn when a single rule runs longer than this (milliseconds)
# GDPRSCAN_RULE_BUDGET_MS=250

# Page fetch and API timeout (seconds)
# GDPRSCAN_HTTP_TIMEOUT=30

# Number of scans `gdprscan history` lists
# GDPRSCAN_HISTORY_LIMIT=100
"""
        env_path.write_text(template)

    return env_path


def create_global_config() -> Path:
    """Create global config directory and file if they don't exist."""
    import yaml

    config_dir = global_config_dir()
    config_dir.mkdir(exist_ok=True)

    config_path = config_dir / "config.yml"
    if not config_path.exists():
        default_config = {
            "api": {
                "url": "http://localhost:3000/api",
            },
            "user": {
                "email": "local@gdprscan",
            },
            "scan": {
                "rule_budget_ms": 250,
                "timeout": 30.0,
            },
            "history": {
                "limit": 100,
            },
        }
        with open(config_path, "w") as f:
            yaml.dump(default_config, f, default_flow_style=False)

    return config_path

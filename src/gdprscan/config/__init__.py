"""
Configuration management for gdprscan.

Supports multiple configuration sources in order of priority:
1. Environment variables (highest priority)
2. Project .env file (.gdprscan/.env)
3. Global config file (~/.gdprscan/config.yml)
4. Default values (lowest priority)
"""

from .env_loader import (
    global_config_dir,
    is_global_config_dir,
    load_env_file,
    load_global_config,
    load_project_config,
)
from .getters import (
    get_api_token,
    get_api_url,
    get_config,
    get_history_limit,
    get_http_timeout,
    get_rule_budget_ms,
    get_user_email,
)
from .project_setup import (
    DB_FILENAME,
    PROJECT_MARKER,
    create_global_config,
    create_project_config_template,
    ensure_project_storage_dir,
    get_project_db_path,
    get_project_env_path,
    get_project_storage_dir,
)

__all__ = [
    # env_loader
    "global_config_dir",
    "is_global_config_dir",
    "load_env_file",
    "load_global_config",
    "load_project_config",
    # getters
    "get_api_token",
    "get_api_url",
    "get_config",
    "get_history_limit",
    "get_http_timeout",
    "get_rule_budget_ms",
    "get_user_email",
    # project_setup
    "DB_FILENAME",
    "PROJECT_MARKER",
    "create_global_config",
    "create_project_config_template",
    "ensure_project_storage_dir",
    "get_project_db_path",
    "get_project_env_path",
    "get_project_storage_dir",
]

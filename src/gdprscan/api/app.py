"""Flask application factory for the history API."""

from __future__ import annotations

import logging
from pathlib import Path

from flask import Flask

from gdprscan.db.init import init_db

from .routes import api_blueprint

logger = logging.getLogger(__name__)


def create_app(db_path: Path, history_limit: int = 100) -> Flask:
    """Build the API app bound to one SQLite database."""
    init_db(db_path)

    app = Flask(__name__)
    app.config["GDPRSCAN_DB_PATH"] = db_path
    app.config["GDPRSCAN_HISTORY_LIMIT"] = history_limit
    app.register_blueprint(api_blueprint)

    logger.info("History API bound to %s", db_path)
    return app

"""Main HistoryManager class."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from gdprscan.db.init import init_db

from .scan_mixin import ScanMixin
from .user_mixin import UserMixin


class HistoryManager(UserMixin, ScanMixin):
    """Manages users and stored scans in one SQLite database."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        init_db(self.db_path)
        self.engine = create_engine(f"sqlite:///{db_path}", echo=False)
        session_factory = sessionmaker(bind=self.engine)
        self.session = session_factory()

    def close(self) -> None:
        """Close the session and release the connection pool."""
        self.session.close()
        self.engine.dispose()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

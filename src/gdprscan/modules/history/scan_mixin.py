"""Scan storage and history queries for HistoryManager."""

from __future__ import annotations

import json
import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from gdprscan.db.models import Scan
from gdprscan.errors import StorageError

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 100


class ScanMixin:
    """Provide scan persistence for the history store."""

    def store_scan(self, user_id: int, url: str, payload: dict[str, Any]) -> int:
        """Persist one scan payload (``score``, ``violations``, ``suggestions``).

        Returns the new scan id.
        """
        if self.get_user(user_id) is None:
            raise ValueError(f"No user found with id {user_id}")

        try:
            scan = Scan(
                user_id=user_id,
                url=url,
                score=int(payload.get("score") or 0),
                violations=json.dumps(payload.get("violations") or []),
                suggestions=json.dumps(payload.get("suggestions") or []),
            )
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid scan payload: {exc}") from exc

        self.session.add(scan)
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageError(f"Failed to store scan for {url}: {exc}") from exc

        logger.info("Stored scan #%d for %s (score %d)", scan.id, url, scan.score)
        return scan.id

    def save_result(self, result: Any, user_id: int) -> int:
        """Persist a ScanResult."""
        return self.store_scan(user_id, result.url, result.to_dict())

    def get_history(self, user_id: int, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict[str, Any]]:
        """Get a user's most recent scans, newest first."""
        scans = (
            self.session.query(Scan)
            .filter_by(user_id=user_id)
            .order_by(Scan.created_at.desc(), Scan.id.desc())
            .limit(limit)
            .all()
        )
        return [scan.to_dict() for scan in scans]

    def get_scan(self, scan_id: int, user_id: int | None = None) -> dict[str, Any] | None:
        """Get one scan, optionally restricted to its owner."""
        query = self.session.query(Scan).filter_by(id=scan_id)
        if user_id is not None:
            query = query.filter_by(user_id=user_id)
        scan = query.first()
        return scan.to_dict() if scan else None

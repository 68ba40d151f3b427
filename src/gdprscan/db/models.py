"""Database models for gdprscan using SQLAlchemy."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _load_json_list(raw: str | None) -> list[Any]:
    return json.loads(raw or "[]")


Base = declarative_base()


class User(Base):
    """An account scans are recorded under."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String, unique=True)
    tier = Column(String, default="free")  # free, pro, agency
    created_at = Column(DateTime(timezone=True), default=_utc_now)

    # Relationships
    scans = relationship("Scan", back_populates="user", cascade="all, delete-orphan")


class Scan(Base):
    """One stored scan result."""

    __tablename__ = "scans"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    url = Column(String)
    score = Column(Integer, default=0)
    violations = Column(Text, default="[]")  # JSON list of findings
    suggestions = Column(Text, default="[]")  # JSON list of strings

    created_at = Column(DateTime(timezone=True), default=_utc_now, index=True)

    # Relationship
    user = relationship("User", back_populates="scans")

    def to_dict(self) -> dict[str, Any]:
        """Return the record with violations/suggestions deserialized."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "url": self.url,
            "score": self.score,
            "violations": _load_json_list(self.violations),
            "suggestions": _load_json_list(self.suggestions),
            "createdAt": self.created_at.isoformat()
            if hasattr(self.created_at, "isoformat")
            else str(self.created_at),
        }

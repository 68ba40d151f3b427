"""Persistence layer for gdprscan."""

from .init import init_db
from .models import Base, Scan, User

__all__ = ["Base", "Scan", "User", "init_db"]

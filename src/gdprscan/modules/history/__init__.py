"""Scan history storage for gdprscan."""

from .manager import HistoryManager

__all__ = ["HistoryManager"]

"""HTTP API for storing and reading scan history."""

from .app import create_app

__all__ = ["create_app"]

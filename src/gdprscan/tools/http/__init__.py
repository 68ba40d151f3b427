"""HTTP helpers for gdprscan."""

from .backend import BackendClient
from .client import HTTPClient, HTTPResponse

__all__ = [
    "BackendClient",
    "HTTPClient",
    "HTTPResponse",
]

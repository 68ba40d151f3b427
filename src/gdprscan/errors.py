"""Exception hierarchy for gdprscan."""

from __future__ import annotations


class GdprScanError(Exception):
    """Base class for all gdprscan errors."""


class DocumentUnavailableError(GdprScanError):
    """The page snapshot could not be acquired, so no scan can run."""


class StorageError(GdprScanError):
    """Reading or writing scan history failed."""


class BackendError(GdprScanError):
    """The remote API rejected a request or could not be reached."""

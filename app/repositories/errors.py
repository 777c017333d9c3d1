"""
app/repositories/errors.py

Repository-layer exceptions for record fetch / persist flows.
"""

from __future__ import annotations


class RepositoryError(Exception):
    """Base exception for record repository failures."""


class UpstreamFetchError(RepositoryError):
    """Raised when records or allowed-sets cannot be read from the store."""


class PersistenceError(RepositoryError):
    """Raised when a single record cannot be written to the store."""

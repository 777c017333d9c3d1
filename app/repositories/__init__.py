"""
app/repositories package marker.
"""

from app.repositories.errors import PersistenceError, RepositoryError, UpstreamFetchError
from app.repositories.record_repository import RecordRepository, RecordStore

__all__ = [
    "PersistenceError",
    "RecordRepository",
    "RecordStore",
    "RepositoryError",
    "UpstreamFetchError",
]

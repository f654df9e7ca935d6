"""Storage collaborator access and boundary normalization."""

from src.persistence.exceptions import (
    StorageConnectionError,
    StorageError,
    StorageNotFoundError,
    StorageParseError,
    StorageResponseError,
)
from src.persistence.snapshot import SnapshotStore
from src.persistence.store import ResultsStore
from src.persistence.supabase import SupabaseStore

__all__ = [
    "ResultsStore",
    "SnapshotStore",
    "StorageConnectionError",
    "StorageError",
    "StorageNotFoundError",
    "StorageParseError",
    "StorageResponseError",
    "SupabaseStore",
]

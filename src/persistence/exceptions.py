"""Custom exceptions for the storage collaborator."""


class StorageError(Exception):
    """Base exception for storage errors."""


class StorageConnectionError(StorageError):
    """Network connection error."""


class StorageResponseError(StorageError):
    """Storage API returned an error response."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class StorageNotFoundError(StorageError):
    """Requested record does not exist."""


class StorageParseError(StorageError):
    """Failed to parse a storage response."""

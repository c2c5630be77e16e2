"""Storage adapter errors."""


class StorageError(RuntimeError):
    """Raised when the backend accepts a request but returns no usable data."""

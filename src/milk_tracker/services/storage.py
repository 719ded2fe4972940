"""Key-value persistence interface."""

from typing import Protocol

RECORDS_KEY = "milkRecords"
COW_PRICE_KEY = "cowPrice"
BUFFALO_PRICE_KEY = "buffaloPrice"


class StorageError(RuntimeError):
    """Raised when the persistence medium cannot be read or written."""


class KeyValueStore(Protocol):
    """String key-value store holding the serialized application state."""

    def get(self, key: str) -> str | None:
        """Return the stored string for a key, or None if absent."""

    def set(self, key: str, value: str) -> None:
        """Store a string under a key. Raises StorageError on failure."""

"""Services package."""

from finance_tracker.services.storage import (
    CorruptStorageError,
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorageInterface,
    StorageError,
)

__all__ = [
    # Storage services
    "CorruptStorageError",
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorageInterface",
    "StorageError",
]

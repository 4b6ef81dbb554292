"""
Storage Services Package

Provides the abstract key/value interface and its implementations.
The JSON file backend is the default; the in-memory one backs the tests.
"""

from finance_tracker.services.storage.interface import (
    CorruptStorageError,
    KeyValueStorageInterface,
    StorageError,
)
from finance_tracker.services.storage.local_file import JsonFileStorage
from finance_tracker.services.storage.memory import InMemoryStorage

__all__ = [
    # Interfaces
    "KeyValueStorageInterface",
    # Exceptions
    "CorruptStorageError",
    "StorageError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
]

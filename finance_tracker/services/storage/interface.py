"""
Abstract Storage Interface

DESIGN DECISION: The store only ever needs one thing from storage: read a
text value under a key, and write a text value under a key. That is the
browser local-storage contract, so that is the whole interface.
This allows us to:
1. Keep the data on disk as a JSON file for everyday use
2. Use in-memory storage for testing
3. Swap in another backend without touching the store

Backends raise StorageError for anything that goes wrong. The store decides
what a failure means; backends never swallow errors.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for a local key/value storage.

    Values are opaque text; serialization is the caller's concern.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: The slot name

        Returns:
            The stored text, or None if nothing is stored under the key

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing whatever was there.

        Args:
            key: The slot name
            value: The text to store

        Raises:
            StorageError: If the value could not be written
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """
        Remove a key. Removing a missing key is not an error.

        Raises:
            StorageError: If the backend cannot be written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptStorageError(StorageError):
    """The storage backend exists but its contents cannot be parsed."""
    pass

"""In-memory storage, for tests and throwaway sessions."""

from typing import Optional

from finance_tracker.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
)


class InMemoryStorage(KeyValueStorageInterface):
    """
    Dict-backed key/value storage.

    Set `fail_reads` / `fail_writes` to simulate a broken backend.
    """

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})
        self.fail_reads = False
        self.fail_writes = False
        self.write_count = 0

    def get_item(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise StorageError("Simulated read failure")
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError("Simulated write failure")
        self._data[key] = value
        self.write_count += 1

    def remove_item(self, key: str) -> None:
        if self.fail_writes:
            raise StorageError("Simulated write failure")
        self._data.pop(key, None)

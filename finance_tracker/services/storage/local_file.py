"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON object on disk maps slot names to text
values, the same shape browser local storage has. This is used because:
1. The data is small (one person's transactions)
2. The file is human-readable and easy to back up
3. No database setup required

TRADEOFFS:
- Every write rewrites the whole file (fine at this data volume)
- No locking (single user, single process)

Writes go to a temporary file next to the target which then replaces it,
so a failed write never leaves a half-written file behind.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from finance_tracker.services.storage.interface import (
    CorruptStorageError,
    KeyValueStorageInterface,
    StorageError,
)


class JsonFileStorage(KeyValueStorageInterface):
    """
    Local key/value storage backed by one JSON file.

    The file is created on first write. A missing file reads as empty.
    """

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        """Read every slot from disk."""
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise StorageError(f"Failed to read {self._path}: {e}") from e

        if not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptStorageError(f"Storage file is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise CorruptStorageError("Storage file does not hold a JSON object")

        return {
            str(key): value
            for key, value in data.items()
            if isinstance(value, str)
        }

    def _write_all(self, data: dict[str, str]) -> None:
        """Atomically replace the file with the given slots."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {self._path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except CorruptStorageError:
            # Other slots are unreadable anyway; start the file over
            data = {}
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)

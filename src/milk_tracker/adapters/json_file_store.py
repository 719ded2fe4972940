"""Local JSON file key-value store."""

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from milk_tracker.services.storage import KeyValueStore, StorageError

logger = logging.getLogger(__name__)


@dataclass
class JsonFileKeyValueStore(KeyValueStore):
    """Keeps every key in one JSON object on disk, rewritten atomically."""

    path: Path
    _cache: dict[str, str] | None = field(default=None, init=False)

    def get(self, key: str) -> str | None:
        """Return the stored value for a key."""
        return self._entries().get(key)

    def set(self, key: str, value: str) -> None:
        """Store a value and rewrite the file."""
        entries = {**self._entries(), key: value}
        self._write(entries)
        self._cache = entries

    def _entries(self) -> dict[str, str]:
        if self._cache is None:
            self._cache = self._read()
        return self._cache

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("Storage file %s is not valid JSON; ignoring it", self.path)
            return {}
        except OSError as exc:
            raise StorageError(f"Cannot read {self.path}") from exc
        if not isinstance(data, dict):
            logger.warning("Storage file %s is not a JSON object; ignoring it", self.path)
            return {}
        return {str(key): value for key, value in data.items() if isinstance(value, str)}

    def _write(self, entries: dict[str, str]) -> None:
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self.path.stem}_", suffix=".json", dir=directory
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(entries, f, indent=2, ensure_ascii=False)
                os.replace(tmp_path, self.path)
            finally:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
        except OSError as exc:
            raise StorageError(f"Cannot write {self.path}") from exc

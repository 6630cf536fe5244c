"""Directory-backed implementation of the key-value store."""

import re
from pathlib import Path

from tripbook.db.repositories import StorageReadError, StorageWriteError

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class FileKeyValueStore:
    """Stores each key as a UTF-8 file in a directory."""

    def __init__(self, directory: str | Path) -> None:
        """Initialize file store.

        Args:
            directory: Directory holding one file per key (created lazily)
        """
        self._dir = Path(directory)

    def path_for(self, key: str) -> Path:
        """File path used for a key."""
        return self._dir / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.json"

    def get(self, key: str) -> str | None:
        """Read a value."""
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Cannot read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        """Write a value atomically (temp file + rename)."""
        path = self.path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            raise StorageWriteError(f"Cannot write {path}: {e}") from e

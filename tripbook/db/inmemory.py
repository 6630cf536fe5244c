"""In-memory implementation of the key-value store."""

from tripbook.db.repositories import StorageQuotaExceededError


class InMemoryKeyValueStore:
    """In-memory implementation of KeyValueStore.

    An optional quota (total characters across all values) mimics a browser
    storage limit so that write failures can be exercised.
    """

    def __init__(self, quota_chars: int | None = None) -> None:
        self._data: dict[str, str] = {}
        self._quota_chars = quota_chars

    def get(self, key: str) -> str | None:
        """Read a value."""
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        """Write a value, enforcing the quota if one is configured."""
        if self._quota_chars is not None:
            others = sum(len(v) for k, v in self._data.items() if k != key)
            if others + len(value) > self._quota_chars:
                raise StorageQuotaExceededError(
                    f"Writing {len(value)} chars to {key!r} exceeds quota of {self._quota_chars}"
                )
        self._data[key] = value

    def keys(self) -> list[str]:
        """Stored keys in insertion order."""
        return list(self._data)

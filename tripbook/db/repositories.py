"""Storage protocol interfaces and persistence result types."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Literal, Protocol, TypeVar

T = TypeVar("T")


class StorageError(Exception):
    """Underlying key-value store failed."""

    pass


class StorageReadError(StorageError):
    """Key-value store could not be read."""

    pass


class StorageWriteError(StorageError):
    """Key-value store rejected a write."""

    pass


class StorageQuotaExceededError(StorageWriteError):
    """Write would exceed the store's capacity."""

    pass


class KeyValueStore(Protocol):
    """Synchronous string-keyed, string-valued store."""

    def get(self, key: str) -> str | None:
        """Read a value.

        Args:
            key: Storage key

        Returns:
            Stored string or None if the key is absent

        Raises:
            StorageReadError: If the medium cannot be read
        """
        ...

    def set(self, key: str, value: str) -> None:
        """Write a value, replacing any previous one.

        Args:
            key: Storage key
            value: Serialized document

        Raises:
            StorageWriteError: If the medium rejects the write
        """
        ...


AbsentReason = Literal["missing", "corrupt", "unavailable"]


@dataclass(frozen=True)
class Parsed(Generic[T]):
    """Stored document was found and validated."""

    value: T


@dataclass(frozen=True)
class Absent:
    """Nothing usable is stored; the caller seeds defaults."""

    reason: AbsentReason
    detail: str | None = None


LoadResult = Parsed[T] | Absent


class SaveResult(str, Enum):
    """Outcome of a write-through."""

    ok = "ok"
    failed = "failed"

"""Persistence gateway - load/save round-trip over a key-value store.

Loads never raise: a missing, corrupt or unreadable document comes back as
``Absent`` and the caller seeds defaults. Saves never raise either: a rejected
write is logged and reported as ``SaveResult.failed`` while the caller's
in-memory state stays authoritative. Writes are fire-once; nothing retries.
"""

import logging
from typing import Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

from tripbook.config import Settings
from tripbook.db.filestore import FileKeyValueStore
from tripbook.db.inmemory import InMemoryKeyValueStore
from tripbook.db.redis_store import RedisKeyValueStore
from tripbook.db.repositories import (
    Absent,
    AbsentReason,
    KeyValueStore,
    LoadResult,
    Parsed,
    SaveResult,
    StorageReadError,
    StorageWriteError,
)
from tripbook.utils.logging import StructuredStorageLogger
from tripbook.utils.metrics import PrometheusStorageMetrics

T = TypeVar("T")

logger = logging.getLogger(__name__)


class PersistenceGateway(Generic[T]):
    """Versioned-key persistence for one document shape."""

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        adapter: TypeAdapter[T],
        metrics: PrometheusStorageMetrics | None = None,
        structured_logger: StructuredStorageLogger | None = None,
    ) -> None:
        """Initialize gateway.

        Args:
            store: Underlying key-value store
            key: Fixed, versioned storage key
            adapter: Pydantic adapter describing the document
            metrics: Storage metrics recorder
            structured_logger: Structured load/save logger
        """
        self._store = store
        self._key = key
        self._adapter = adapter
        self._metrics = metrics or PrometheusStorageMetrics()
        self._logger = structured_logger or StructuredStorageLogger()

    @property
    def key(self) -> str:
        """Storage key this gateway reads and writes."""
        return self._key

    def load(self) -> LoadResult[T]:
        """Read and validate the stored document."""
        try:
            raw = self._store.get(self._key)
        except StorageReadError as e:
            return self._absent("unavailable", str(e))

        if raw is None:
            return self._absent("missing")

        try:
            value = self._adapter.validate_json(raw)
        except ValidationError as e:
            # Covers both invalid JSON and structurally wrong documents
            return self._absent("corrupt", f"{e.error_count()} validation error(s)")

        self._metrics.inc_load(self._key, "parsed")
        self._logger.log_load(self._key, "parsed", size=len(raw))
        return Parsed(value)

    def save(self, value: T) -> SaveResult:
        """Serialize and write the full document under the fixed key."""
        text = self._adapter.dump_json(value, by_alias=True, exclude_none=True).decode("utf-8")

        try:
            self._store.set(self._key, text)
        except StorageWriteError as e:
            self._metrics.inc_write(self._key, SaveResult.failed.value)
            self._logger.log_save(self._key, SaveResult.failed.value, len(text), error_reason=str(e))
            return SaveResult.failed

        self._metrics.inc_write(self._key, SaveResult.ok.value)
        self._logger.log_save(self._key, SaveResult.ok.value, len(text))
        return SaveResult.ok

    def _absent(self, reason: AbsentReason, detail: str | None = None) -> Absent:
        self._metrics.inc_load(self._key, reason)
        self._logger.log_load(self._key, reason, reason=detail)
        return Absent(reason=reason, detail=detail)


def get_store(settings: Settings) -> KeyValueStore:
    """Factory function to get the key-value store selected by config.

    Returns:
        RedisKeyValueStore, FileKeyValueStore or InMemoryKeyValueStore
    """
    if settings.storage_backend == "redis":
        if not settings.redis_url:
            raise ValueError("storage_backend=redis requires TRIPBOOK_REDIS_URL")
        logger.info("Using Redis key-value store")
        return RedisKeyValueStore.from_url(settings.redis_url)

    if settings.storage_backend == "file":
        logger.info(f"Using file key-value store at {settings.storage_dir}")
        return FileKeyValueStore(settings.storage_dir)

    logger.info("Using in-memory key-value store")
    return InMemoryKeyValueStore(quota_chars=settings.memory_quota_chars)

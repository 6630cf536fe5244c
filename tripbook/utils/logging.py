"""Structured logging for storage loads and writes."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredStorageLogger:
    """Structured logger for persistence gateway operations."""

    def log_load(self, key: str, outcome: str, size: int | None = None, reason: str | None = None) -> None:
        """Log a load attempt with structured data."""
        log_data: dict[str, Any] = {"key": key, "op": "load", "outcome": outcome}
        if size is not None:
            log_data["size"] = size
        if reason:
            log_data["reason"] = reason

        log_msg = f"Storage load: {key} - {outcome}"

        if outcome in ("parsed", "missing"):
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})

    def log_save(self, key: str, outcome: str, size: int, error_reason: str | None = None) -> None:
        """Log a write attempt with structured data."""
        log_data: dict[str, Any] = {"key": key, "op": "save", "outcome": outcome, "size": size}
        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Storage save: {key} - {outcome}"

        if outcome == "ok":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.error(log_msg, extra={"structured": log_data})

"""Shared write-through plumbing for itinerary sessions."""

import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Literal, Protocol

from tripbook.db.repositories import SaveResult

logger = logging.getLogger(__name__)

NoticeLevel = Literal["info", "warning"]

SAVE_FAILED_MESSAGE = "Could not save changes; they are kept for this session only"
LOAD_FAILED_MESSAGE = "Could not read the saved itinerary; showing defaults without overwriting it"
RESET_MESSAGE = "Itinerary reset"


class Notifier(Protocol):
    """External toast/notification collaborator (fire-and-forget)."""

    def notify(self, message: str, level: NoticeLevel = "info") -> None:
        """Show a transient notice."""
        ...


class WriteThroughSession:
    """Base for sessions that persist synchronously after every mutation."""

    def __init__(
        self,
        notifier: Notifier | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._notifier = notifier
        self._clock = clock or datetime.now
        self.last_save: SaveResult | None = None

    def _now(self) -> datetime:
        return self._clock()

    def _now_ms(self) -> int:
        return int(self._clock().timestamp() * 1000)

    def _notify(self, message: str, level: NoticeLevel = "info") -> None:
        if self._notifier is not None:
            self._notifier.notify(message, level)

    def _record_saves(self, results: Iterable[SaveResult]) -> SaveResult:
        """Fold per-document write outcomes into one and surface failures."""
        outcome = SaveResult.ok
        for result in results:
            if result is SaveResult.failed:
                outcome = SaveResult.failed

        self.last_save = outcome
        if outcome is SaveResult.failed:
            logger.warning(f"[{type(self).__name__}] write-through failed, in-memory state kept")
            self._notify(SAVE_FAILED_MESSAGE, "warning")
        return outcome

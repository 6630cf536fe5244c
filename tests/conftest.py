"""Shared pytest fixtures for all test suites."""

from collections.abc import Callable
from datetime import date, datetime, timedelta

import pytest

from tripbook.config import Settings
from tripbook.db.inmemory import InMemoryKeyValueStore
from tripbook.db.repositories import StorageReadError


class FakeClock:
    """Deterministic clock that advances one second per reading."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(seconds=1)
        return value


class FlakyReadStore(InMemoryKeyValueStore):
    """In-memory store whose next ``failing_reads`` reads raise."""

    def __init__(self) -> None:
        super().__init__()
        self.failing_reads = 0

    def get(self, key: str) -> str | None:
        if self.failing_reads > 0:
            self.failing_reads -= 1
            raise StorageReadError("store temporarily unreadable")
        return super().get(key)


class RecordingNotifier:
    """Notifier double that records every notice."""

    def __init__(self) -> None:
        self.notices: list[tuple[str, str]] = []

    def notify(self, message: str, level: str = "info") -> None:
        self.notices.append((message, level))


@pytest.fixture
def settings() -> Settings:
    """Settings independent of environment and .env files."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        storage_backend="memory",
        seed_start_date=date(2026, 2, 4),
        default_item_time="09:00",
        default_event_offset_minutes=60,
    )


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    """Empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """Clock starting at 2026-02-01 08:00."""
    return FakeClock(datetime(2026, 2, 1, 8, 0))


@pytest.fixture
def notifier() -> RecordingNotifier:
    """Recording notifier."""
    return RecordingNotifier()


@pytest.fixture
def flaky_store() -> FlakyReadStore:
    """In-memory store that can be told to fail its next reads."""
    return FlakyReadStore()

"""Integration tests: sessions over real stores, across restarts."""

import json
from datetime import date, datetime
from pathlib import Path
from unittest.mock import MagicMock

from prometheus_client import REGISTRY

from tripbook.config import Settings
from tripbook.db.filestore import FileKeyValueStore
from tripbook.db.gateway import get_store
from tripbook.db.redis_store import RedisKeyValueStore
from tripbook.db.repositories import SaveResult
from tripbook.session.pool_session import PoolSession
from tripbook.session.trip_session import TripSession


def file_settings(tmp_path: Path) -> Settings:
    return Settings(  # type: ignore[call-arg]
        _env_file=None,
        storage_backend="file",
        storage_dir=str(tmp_path / "state"),
        seed_start_date=date(2026, 2, 4),
    )


def test_trip_survives_restart_on_disk(tmp_path: Path) -> None:
    """Test a trip edited in one process is restored in the next."""
    settings = file_settings(tmp_path)

    session = TripSession.open(get_store(settings), settings)
    session.rename("Tokyo Trip")
    day = session.add_day("2026/02/07")
    session.add_item("Tsukiji", time="07:00", location="Tsukiji Outer Market")
    session.add_item("Packing", time="")
    first, second = session.items_for_day(day.id)
    session.swap_items(first.id, second.id)

    restored = TripSession.open(get_store(settings), settings)

    assert restored.trip == session.trip
    assert [i.title for i in restored.items_for_day(day.id)] == ["Packing", "Tsukiji"]
    on_disk = json.loads((tmp_path / "state" / "trip_planner_v1.json").read_text(encoding="utf-8"))
    assert on_disk["name"] == "Tokyo Trip"


def test_pool_survives_restart_on_disk(tmp_path: Path) -> None:
    """Test both pool documents are written and read back together."""
    settings = file_settings(tmp_path)

    session = PoolSession.open(get_store(settings), settings)
    new_day = session.add_day()
    session.add_event("Fish market", when="2026-02-01T05:30", location="Toyosu")

    restored = PoolSession.open(get_store(settings), settings)

    assert restored.days == session.days
    assert restored.events == session.events
    assert [e.start_at for e in restored.events_for_day(new_day.id)] == [datetime(2026, 2, 7, 5, 30)]


def test_corrupt_file_recovers(tmp_path: Path) -> None:
    """Test a garbled file on disk is replaced by defaults on next start."""
    settings = file_settings(tmp_path)
    store = FileKeyValueStore(settings.storage_dir)
    store.set(settings.trip_key, "\x00\x01 garbage")

    session = TripSession.open(store, settings)

    assert len(session.trip.days) == 3
    assert json.loads(store.get(settings.trip_key) or "{}")["id"] == session.trip.id


def test_session_over_redis_store() -> None:
    """Test the session writes through a Redis-backed store."""
    settings = Settings(_env_file=None, seed_start_date=date(2026, 2, 4))  # type: ignore[call-arg]
    data: dict[str, str] = {}
    client = MagicMock()
    client.get.side_effect = data.get
    client.set.side_effect = data.__setitem__

    session = TripSession.open(RedisKeyValueStore(client), settings)
    session.add_item("Onsen", time="20:00")

    assert json.loads(data[settings.trip_key])["updatedAt"] == session.trip.updated_at
    assert TripSession.open(RedisKeyValueStore(client), settings).trip == session.trip


def test_storage_metrics_recorded(tmp_path: Path) -> None:
    """Test loads and writes are counted per key and outcome."""
    settings = file_settings(tmp_path)

    def count(name: str, key: str, outcome: str) -> float:
        value = REGISTRY.get_sample_value(name, {"key": key, "outcome": outcome})
        return value or 0.0

    missing_before = count("storage_loads_total", settings.trip_key, "missing")
    writes_before = count("storage_writes_total", settings.trip_key, "ok")

    session = TripSession.open(get_store(settings), settings)
    session.add_item("Ramen")

    assert session.last_save is SaveResult.ok
    assert count("storage_loads_total", settings.trip_key, "missing") == missing_before + 1
    assert count("storage_writes_total", settings.trip_key, "ok") == writes_before + 2

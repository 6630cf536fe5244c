"""Test JSON schema export and document validation."""

import json
import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "scripts"))

from export_schemas import main as export_schemas  # noqa: E402

from tripbook.models import DAY_LIST_DOCUMENT, EVENT_POOL_DOCUMENT, TRIP_DOCUMENT  # noqa: E402


@pytest.fixture
def schemas_dir(tmp_path: Path) -> Path:
    """Export schemas into a temporary directory."""
    export_schemas(tmp_path)
    return tmp_path


def test_schemas_exist(schemas_dir: Path) -> None:
    """Test that schema files were created."""
    for name in ["Trip", "DayList", "EventPool", "TripExport", "PoolExport"]:
        assert (schemas_dir / f"{name}.schema.json").exists()


def test_trip_schema_uses_aliases(schemas_dir: Path) -> None:
    """Test that the Trip schema describes the camelCase document."""
    with open(schemas_dir / "Trip.schema.json") as f:
        schema = json.load(f)
    assert schema["title"] == "Trip"
    assert "dateRange" in schema["properties"]
    assert "updatedAt" in schema["required"]


def test_event_pool_schema_is_array(schemas_dir: Path) -> None:
    """Test that the event pool schema is a list of events."""
    with open(schemas_dir / "EventPool.schema.json") as f:
        schema = json.load(f)
    assert schema["type"] == "array"
    assert "startAt" in schema["$defs"]["Event"]["properties"]


def test_legacy_day_document_defaults_manual_order() -> None:
    """Test documents written before manualOrder existed still validate."""
    raw = json.dumps(
        {
            "id": "trip_1",
            "name": "Old",
            "dateRange": "",
            "updatedAt": 1,
            "days": [
                {
                    "id": "day_1",
                    "label": "Day 1",
                    "dateText": "2026/02/04",
                    "items": [{"id": "i", "time": "09:30", "title": "t", "location": "", "note": ""}],
                }
            ],
        }
    )

    trip = TRIP_DOCUMENT.validate_json(raw)

    assert trip.days[0].manual_order is False
    assert trip.days[0].items[0].time == "09:30"


def test_day_list_requires_strict_iso_dates() -> None:
    """Test day records reject non-ISO date strings and numbers."""
    assert DAY_LIST_DOCUMENT.validate_json('[{"id": "d", "date": "2026-02-05"}]')[0].date.day == 5

    for bad in ['"2026/02/05"', '"Feb 5"', "20260205"]:
        with pytest.raises(ValidationError):
            DAY_LIST_DOCUMENT.validate_json(f'[{{"id": "d", "date": {bad}}}]')


def test_event_requires_title_and_start() -> None:
    """Test events missing required fields are rejected."""
    with pytest.raises(ValidationError):
        EVENT_POOL_DOCUMENT.validate_json('[{"id": "e", "startAt": "2026-02-05T10:00:00"}]')
    with pytest.raises(ValidationError):
        EVENT_POOL_DOCUMENT.validate_json('[{"id": "e", "title": "x"}]')

"""Test the export-to-file script."""

import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "scripts"))

from export_itinerary import main as export_itinerary  # noqa: E402


def test_trip_export_written_under_trip_name(tmp_path: Path) -> None:
    """Test the default variant writes the seeded trip named after itself."""
    assert export_itinerary(["trip", str(tmp_path)]) == 0

    path = tmp_path / "My_Trip.json"
    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["name"] == "My Trip"
    assert len(document["days"]) == 3
    assert "exportedAt" in document


def test_pool_export_written_with_timestamped_name(tmp_path: Path) -> None:
    """Test the pool variant writes days plus events."""
    assert export_itinerary(["pool", str(tmp_path / "out")]) == 0

    files = list((tmp_path / "out").glob("itinerary_*.json"))
    assert len(files) == 1
    document = json.loads(files[0].read_text(encoding="utf-8"))
    assert set(document) == {"days", "events", "exportedAt"}


def test_unknown_variant_rejected(tmp_path: Path) -> None:
    """Test an unknown variant exits with a usage error and writes nothing."""
    assert export_itinerary(["calendar", str(tmp_path)]) == 2
    assert list(tmp_path.iterdir()) == []

"""Export JSON schemas for the persisted and exported documents."""

import json
from pathlib import Path

from pydantic import TypeAdapter

from tripbook.models import (
    DAY_LIST_DOCUMENT,
    EVENT_POOL_DOCUMENT,
    TRIP_DOCUMENT,
    PoolExport,
    TripExport,
)

SCHEMAS: dict[str, TypeAdapter] = {
    "Trip": TRIP_DOCUMENT,
    "DayList": DAY_LIST_DOCUMENT,
    "EventPool": EVENT_POOL_DOCUMENT,
    "TripExport": TypeAdapter(TripExport),
    "PoolExport": TypeAdapter(PoolExport),
}


def main(schemas_dir: Path = Path("docs/schemas")) -> None:
    """Export schemas to docs/schemas/."""
    schemas_dir.mkdir(parents=True, exist_ok=True)

    for name, adapter in SCHEMAS.items():
        schema = adapter.json_schema(by_alias=True)
        path = schemas_dir / f"{name}.schema.json"
        with open(path, "w") as f:
            json.dump(schema, f, indent=2)
        print(f"Exported {name} schema to {path}")


if __name__ == "__main__":
    main()

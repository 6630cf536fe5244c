"""Write an export file for the itinerary held in the configured store.

Usage:
    python scripts/export_itinerary.py [trip|pool] [output_dir]
"""

import sys
from pathlib import Path

from tripbook.config import get_settings
from tripbook.db.gateway import get_store
from tripbook.session.pool_session import PoolSession
from tripbook.session.trip_session import TripSession


def main(argv: list[str]) -> int:
    """Export the trip (default) or the event pool to a JSON file."""
    variant = argv[0] if argv else "trip"
    out_dir = Path(argv[1]) if len(argv) > 1 else Path(".")

    if variant not in ("trip", "pool"):
        print(f"Unknown variant {variant!r}; expected 'trip' or 'pool'", file=sys.stderr)
        return 2

    settings = get_settings()
    store = get_store(settings)
    session = TripSession.open(store, settings) if variant == "trip" else PoolSession.open(store, settings)

    export = session.export()
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / export.filename
    path.write_text(export.content, encoding="utf-8")
    print(f"Exported {variant} to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))

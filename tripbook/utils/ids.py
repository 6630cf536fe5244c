"""Identifier generation for trips, days, items and events."""

import time
import uuid


def new_id(prefix: str = "id") -> str:
    """Generate a session-unique identifier.

    Combines a random component with a nanosecond clock reading, e.g.
    ``item_3f9a1c0b2d4e_17f3a2b1c9d8e000``. No counter is persisted.

    Args:
        prefix: Namespace prefix ("trip", "day", "item", "event", ...)

    Returns:
        Identifier string
    """
    return f"{prefix}_{uuid.uuid4().hex[:12]}_{time.time_ns():x}"

"""Export documents - portable snapshots of the current state."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from tripbook.models.pool import DayRecord, Event
from tripbook.models.trip import Trip


class TripExport(Trip):
    """Trip document plus export timestamp."""

    exported_at: datetime = Field(..., alias="exportedAt")


class PoolExport(BaseModel):
    """Day list and chronologically sorted event pool plus export timestamp."""

    model_config = ConfigDict(populate_by_name=True)

    days: list[DayRecord]
    events: list[Event]
    exported_at: datetime = Field(..., alias="exportedAt")

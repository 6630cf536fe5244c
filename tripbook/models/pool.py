"""Event-pool models - standalone days plus a flat pool of timestamped events."""

import re
from datetime import date as date_type

from pydantic import BaseModel, ConfigDict, Field, NaiveDatetime, field_validator

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class DayRecord(BaseModel):
    """Calendar day; event membership is computed from event dates."""

    id: str
    date: date_type

    @field_validator("date", mode="before")
    @classmethod
    def validate_iso_date(cls, v: object) -> object:
        """Ensure string dates are strict YYYY-MM-DD."""
        if isinstance(v, str) and not _ISO_DATE_RE.match(v):
            raise ValueError(f"date must be YYYY-MM-DD, got {v!r}")
        if isinstance(v, (int, float)):
            raise ValueError("date must be YYYY-MM-DD, not a number")
        return v


class Event(BaseModel):
    """Scheduled activity with an absolute (naive, local) timestamp."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    start_at: NaiveDatetime = Field(..., alias="startAt")
    location: str | None = None
    note: str | None = None

    @property
    def date(self) -> date_type:
        """Calendar date the event belongs to."""
        return self.start_at.date()

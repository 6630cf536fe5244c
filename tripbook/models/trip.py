"""Trip models - day-owns-items itinerary."""

from pydantic import BaseModel, ConfigDict, Field


class Item(BaseModel):
    """Single scheduled activity within a day."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    time: str = ""  # "09:30", blank when unscheduled
    title: str
    location: str = ""
    note: str = ""


class Day(BaseModel):
    """One day of a trip, owning its items.

    ``items`` is kept in insertion order unless ``manual_order`` is set, in
    which case it is the display order verbatim.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    label: str  # "Day 1"
    date_text: str = Field(default="", alias="dateText")  # free text, e.g. "2026/02/04"
    items: list[Item] = Field(default_factory=list)
    manual_order: bool = Field(default=False, alias="manualOrder")

    def find_item(self, item_id: str) -> Item | None:
        """Get item by ID."""
        return next((item for item in self.items if item.id == item_id), None)


class Trip(BaseModel):
    """Top-level itinerary aggregate."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    date_range: str = Field(default="", alias="dateRange")
    days: list[Day] = Field(default_factory=list)
    updated_at: int = Field(..., alias="updatedAt")  # epoch milliseconds

    def find_day(self, day_id: str) -> Day | None:
        """Get day by ID."""
        return next((day for day in self.days if day.id == day_id), None)

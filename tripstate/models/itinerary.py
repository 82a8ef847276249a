"""Itinerary models - the session trip document."""

from pydantic import Field

from tripstate.models.common import CamelModel


class ActivityFields(CamelModel):
    """Editable activity fields, without identity."""

    time: str = ""
    title: str = ""
    location: str = ""
    cost: float = 0
    type: str = ""
    notes: str | None = None


class Activity(ActivityFields):
    """Single scheduled item within a day."""

    id: str


class Day(CamelModel):
    """Date-keyed container of activities."""

    date: str
    activities: list[Activity] = Field(default_factory=list)


class Itinerary(CamelModel):
    """Named trip with a date range and ordered days."""

    destination_name: str
    start_date: str
    end_date: str
    days: list[Day] = Field(default_factory=list)

"""Itinerary document manager - session-only CRUD over days and activities.

The document is never mutated in place: every applied change replaces it with
an updated copy, so earlier snapshots held by callers stay valid. Misses
(unknown date or activity id) are silent no-ops that return the current
document unchanged.
"""

import logging
import uuid
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from pydantic import BaseModel

from tripstate.models.common import LoadState
from tripstate.models.itinerary import Activity, ActivityFields, Day, Itinerary

logger = logging.getLogger(__name__)

ItineraryFetch = Callable[[], Awaitable[Itinerary | None]]
ActivityChange = Callable[[list[Activity]], list[Activity] | None]


def new_activity_id() -> str:
    """Generate an activity id unique across the whole itinerary."""
    return uuid.uuid4().hex


class ItineraryMetrics:
    """Interface for itinerary mutation metrics."""

    def inc_mutation(self, operation: str, outcome: str) -> None:
        """Increment mutation counter."""
        pass


class ItineraryManager:
    """Owns one in-memory itinerary for the lifetime of a screen session.

    State machine: loading -> loaded | empty. CRUD keeps the state at loaded;
    only a fresh manager (or a new load_itinerary call) starts over.
    """

    def __init__(
        self,
        fetch: ItineraryFetch,
        *,
        id_factory: Callable[[], str] | None = None,
        metrics: ItineraryMetrics | None = None,
    ) -> None:
        """Initialize manager in the loading state.

        Args:
            fetch: Upstream source returning a full itinerary or None
            id_factory: Activity id generator (default: uuid4 hex)
            metrics: Metrics recorder (optional, defaults to no-op)
        """
        self._fetch = fetch
        self._new_id = id_factory or new_activity_id
        self._metrics = metrics or ItineraryMetrics()
        self._itinerary: Itinerary | None = None
        self._state = LoadState.loading

    @property
    def state(self) -> LoadState:
        """Current lifecycle state."""
        return self._state

    @property
    def itinerary(self) -> Itinerary | None:
        """Current document, None until loaded."""
        return self._itinerary

    async def load_itinerary(self) -> Itinerary | None:
        """Fetch and replace the whole document."""
        self._state = LoadState.loading
        try:
            itinerary = await self._fetch()
        except Exception as e:
            logger.error(f"Error loading itinerary: {e}", exc_info=True)
            itinerary = None

        self._itinerary = itinerary
        self._state = LoadState.empty if itinerary is None else LoadState.loaded
        return itinerary

    def day(self, date: str) -> Day | None:
        """Look up a day by date."""
        if self._itinerary is None:
            return None
        return next((d for d in self._itinerary.days if d.date == date), None)

    def total_cost(self, date: str | None = None) -> float:
        """Sum activity costs for one day, or for the whole trip."""
        if self._itinerary is None:
            return 0
        days = [d for d in self._itinerary.days if date is None or d.date == date]
        return sum(a.cost for d in days for a in d.activities)

    def add_activity(
        self, date: str, fields: ActivityFields | Mapping[str, Any]
    ) -> Itinerary | None:
        """Append a new activity with a fresh id to an existing day.

        No day is created when ``date`` is absent.
        """
        values = self._activity_values(fields, "add_activity")

        def append(activities: list[Activity]) -> list[Activity]:
            activity = Activity.model_construct(**{**values, "id": self._new_id()})
            return [*activities, activity]

        return self._apply("add_activity", date, append)

    def edit_activity(
        self, date: str, activity_id: str, patch: ActivityFields | Mapping[str, Any]
    ) -> Itinerary | None:
        """Field-level merge of ``patch`` into one activity of one day."""
        values = self._activity_values(patch, "edit_activity")

        def merge(activities: list[Activity]) -> list[Activity] | None:
            for index, activity in enumerate(activities):
                if activity.id == activity_id:
                    updated = list(activities)
                    updated[index] = activity.model_copy(update=values)
                    return updated
            return None

        return self._apply("edit_activity", date, merge)

    def delete_activity(self, date: str, activity_id: str) -> Itinerary | None:
        """Remove the first activity of that day whose id matches."""

        def remove(activities: list[Activity]) -> list[Activity] | None:
            for index, activity in enumerate(activities):
                if activity.id == activity_id:
                    return activities[:index] + activities[index + 1 :]
            return None

        return self._apply("delete_activity", date, remove)

    def _apply(self, operation: str, date: str, change: ActivityChange) -> Itinerary | None:
        """Run ``change`` on the day's activities and swap in an updated copy."""
        itinerary = self._itinerary
        if itinerary is None:
            logger.warning(f"[{operation}] no itinerary loaded, ignoring")
            return None

        for index, day in enumerate(itinerary.days):
            if day.date != date:
                continue
            activities = change(day.activities)
            if activities is None:
                break

            days = list(itinerary.days)
            days[index] = day.model_copy(update={"activities": activities})
            self._itinerary = itinerary.model_copy(update={"days": days})
            self._metrics.inc_mutation(operation, "applied")
            return self._itinerary

        self._metrics.inc_mutation(operation, "miss")
        return itinerary

    @staticmethod
    def _activity_values(
        fields: ActivityFields | Mapping[str, Any], operation: str
    ) -> dict[str, Any]:
        """Extract caller-supplied activity fields; identity is never taken from input."""
        if isinstance(fields, BaseModel):
            values = fields.model_dump(exclude_unset=True)
        else:
            values, unknown = Activity.normalize_keys(dict(fields))
            if unknown:
                logger.warning(f"[{operation}] ignoring unknown keys: {sorted(unknown)}")
        values.pop("id", None)
        return values

"""Event listing and detail queries."""

from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

import structlog

from ..adapters.database.manager import DatabaseManager
from ..adapters.mapping import (
    adapt_event,
    adapt_event_with_race_count,
    adapt_event_with_races,
    event_updates_to_row,
)
from ..core.entities import Event, EventWithRaceCount, EventWithRaces
from ..core.enums import EventStatus
from ..core.errors import RowNotFoundError

logger = structlog.get_logger()

UPCOMING_STATUSES = [status.value for status in EventStatus if status.is_upcoming]


def _query_year(year: Any) -> int:
    """The requested year, or the current one when it is missing or not numeric."""
    try:
        return int(year)
    except (TypeError, ValueError):
        return datetime.now(timezone.utc).year


class EventService:
    def __init__(self, database: DatabaseManager):
        self.database = database

    async def get_past_events(self, year: Any = None) -> List[Event]:
        """Finished events of a year, newest first."""
        rows = await self.database.fetch_events_by_status(
            [EventStatus.FINISHED.value], year=_query_year(year), newest_first=True
        )
        return [adapt_event(row) for row in rows]

    async def get_future_events(self) -> List[Event]:
        """Events open for registration or sold out, soonest first."""
        rows = await self.database.fetch_events_by_status(UPCOMING_STATUSES)
        return [adapt_event(row) for row in rows]

    async def get_event_with_races(self, event_id: str) -> Optional[EventWithRaces]:
        row = await self.database.fetch_event_with_races(event_id)
        if row is None:
            logger.info("Event not found", event_id=event_id)
            return None
        return adapt_event_with_races(row)

    async def update_event(self, event_id: str, updates: Mapping[str, Any]) -> Optional[Event]:
        """Apply a partial update given in domain attributes; None for an unknown event."""
        row = await self.database.update_event(event_id, event_updates_to_row(updates))
        if row is None:
            logger.info("Event not found", event_id=event_id)
            return None
        return adapt_event(row)

    async def get_events_by_organization(self, organization_id: str) -> List[EventWithRaceCount]:
        """An organization's events with their race counts; [] for an unknown organization."""
        try:
            key = await self.database.get_internal_key("organizations", organization_id)
        except RowNotFoundError:
            logger.info("Organization not found", organization_id=organization_id)
            return []

        rows = await self.database.fetch_events_by_organization(key)
        return [adapt_event_with_race_count(row) for row in rows]

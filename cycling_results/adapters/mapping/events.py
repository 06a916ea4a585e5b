"""Adapters for event rows."""

from datetime import datetime
from typing import Any, Dict, Mapping

from ...core.entities import Event, EventWithRaceCount, EventWithRaces
from ...core.enums import EventStatus
from ..database.rows import EventRow, EventWithRaceCountRow, EventWithRacesRow
from .categories import (
    adapt_race_category,
    adapt_race_category_gender,
    adapt_race_category_length,
)
from .common import adapt_array, map_timestamps, public_id, to_iso
from .races import adapt_race

# Domain attribute -> column, for the fields an event update may carry
EVENT_UPDATE_COLUMNS = {
    "name": "name",
    "description": "description",
    "date_time": "date_time",
    "country": "country",
    "state": "state",
    "city": "city",
    "status": "event_status",
    "is_public_visible": "is_public_visible",
}


def adapt_event(row: EventRow) -> Event:
    created_at, updated_at = map_timestamps(row)
    return Event(
        id=public_id(row),
        name=row["name"],
        description=row.get("description"),
        date_time=to_iso(row.get("date_time")),
        year=row["year"],
        city=row.get("city"),
        state=row["state"],
        country=row["country"],
        status=EventStatus(row["event_status"]),
        is_public_visible=bool(row.get("is_public_visible", False)),
        organization_id=row.get("organization_id"),
        created_by=row.get("created_by"),
        created_at=created_at,
        updated_at=updated_at,
    )


def adapt_event_with_races(row: EventWithRacesRow) -> EventWithRaces:
    """Adapt an event with its races and supported race configurations."""
    event = adapt_event(row)
    return EventWithRaces(
        **vars(event),
        races=adapt_array(row.get("races"), adapt_race),
        supported_categories=adapt_array(row.get("supported_categories"), adapt_race_category),
        supported_genders=adapt_array(row.get("supported_genders"), adapt_race_category_gender),
        supported_lengths=adapt_array(row.get("supported_lengths"), adapt_race_category_length),
    )


def adapt_event_with_race_count(row: EventWithRaceCountRow) -> EventWithRaceCount:
    event = adapt_event(row)
    return EventWithRaceCount(**vars(event), race_count=row.get("race_count") or 0)


def event_updates_to_row(updates: Mapping[str, Any]) -> Dict[str, Any]:
    """Column values for a partial event update.

    Only the attributes present in ``updates`` are emitted; attributes that
    an update cannot change are ignored. An ISO ``date_time`` is parsed back
    to a datetime.
    """
    row: Dict[str, Any] = {}
    for attribute, column in EVENT_UPDATE_COLUMNS.items():
        if attribute not in updates:
            continue
        value = updates[attribute]
        if isinstance(value, EventStatus):
            value = value.value
        elif column == "date_time" and isinstance(value, str):
            value = datetime.fromisoformat(value)
        row[column] = value
    return row

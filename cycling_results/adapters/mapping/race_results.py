"""Flatteners for nested race result responses.

Two nestings reach this module. Race-centric rows embed the cyclist (with
its user) in each result; cyclist-centric rows embed the race together with
its event, categories and ranking system. Both flatten to one record per
result and share the ranking point rule: ``points`` is taken from the
embedded ranking point and is None when the result scored none.
"""

from typing import List, Optional

import structlog

from ...core.entities import RaceDetailResult, RaceResult
from ...core.enums import EventStatus
from ..database.rows import CyclistRaceResultRow, RaceDetailResultRow
from .common import adapt_array, map_timestamps, public_id, to_iso
from .ranking_points import adapt_optional_ranking_point

logger = structlog.get_logger()


def adapt_race_detail_result(row: RaceDetailResultRow) -> RaceDetailResult:
    """Flatten a race-centric result row (result + cyclist + user + ranking point)."""
    created_at, updated_at = map_timestamps(row)
    ranking_point = adapt_optional_ranking_point(row.get("ranking_point"))
    cyclist = row["cyclist"]
    user = cyclist["user"]

    return RaceDetailResult(
        id=public_id(row),
        place=row["place"],
        time=row.get("time"),
        points=ranking_point.points if ranking_point else None,
        cyclist_id=public_id(user),
        cyclist_first_name=user["first_name"],
        cyclist_last_name=user.get("last_name") or "",
        created_at=created_at,
        updated_at=updated_at,
        ranking_point=ranking_point,
    )


def adapt_race_result(row: CyclistRaceResultRow) -> RaceResult:
    """Flatten a cyclist-centric result row.

    The embedded race carries its event and category rows; their names are
    copied inline so the record renders without further lookups.
    """
    created_at, updated_at = map_timestamps(row)
    ranking_point = adapt_optional_ranking_point(row.get("ranking_point"))
    race = row["race"]
    event = race["event"]

    return RaceResult(
        id=public_id(row),
        place=row["place"],
        time=row.get("time"),
        points=ranking_point.points if ranking_point else None,
        event_id=public_id(event),
        event_name=event["name"],
        event_date_time=to_iso(event.get("date_time")),
        event_year=event["year"],
        event_city=event.get("city"),
        event_state=event["state"],
        event_country=event["country"],
        event_status=EventStatus(event["event_status"]),
        race_id=public_id(race),
        race_name=race.get("name"),
        race_date_time=to_iso(race.get("date_time")),
        race_category_id=public_id(race["race_category"]),
        race_category_gender_id=public_id(race["race_category_gender"]),
        race_category_length_id=public_id(race["race_category_length"]),
        race_category_type=race["race_category"]["name"],
        race_category_gender_type=race["race_category_gender"]["name"],
        race_category_length_type=race["race_category_length"]["name"],
        race_ranking_type=race["race_ranking"]["name"],
        created_at=created_at,
        updated_at=updated_at,
        ranking_point=ranking_point,
    )


def flatten_race_results(
    rows: Optional[List[RaceDetailResultRow]],
) -> List[RaceDetailResult]:
    """Race-centric flatten. A missing or empty list yields []."""
    return adapt_array(rows, adapt_race_detail_result)


def flatten_cyclist_results(
    rows: Optional[List[CyclistRaceResultRow]],
) -> List[RaceResult]:
    """Cyclist-centric flatten. A missing or empty list yields []."""
    results = adapt_array(rows, adapt_race_result)
    logger.debug("Flattened cyclist results", count=len(results))
    return results

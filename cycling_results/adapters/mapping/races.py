"""Adapters for race rows."""

from ...core.entities import Race, RaceWithResults
from ..database.rows import RaceRow, RaceWithResultsRow
from .common import map_timestamps, public_id, to_iso
from .race_results import flatten_race_results


def adapt_race(row: RaceRow) -> Race:
    """Adapt a race row. Foreign keys stay internal keys."""
    created_at, updated_at = map_timestamps(row)
    return Race(
        id=public_id(row),
        name=row.get("name"),
        description=row.get("description"),
        date_time=to_iso(row.get("date_time")),
        is_public_visible=bool(row.get("is_public_visible", False)),
        event_id=row["event_id"],
        race_category_id=row["race_category_id"],
        race_category_gender_id=row["race_category_gender_id"],
        race_category_length_id=row["race_category_length_id"],
        race_ranking_id=row["race_ranking_id"],
        created_at=created_at,
        updated_at=updated_at,
    )


def adapt_race_with_results(row: RaceWithResultsRow) -> RaceWithResults:
    """Adapt a race row with its embedded results, keeping their order."""
    race = adapt_race(row)
    return RaceWithResults(
        **vars(race),
        race_results=flatten_race_results(row.get("race_results")),
    )

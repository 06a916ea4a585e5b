"""Adapters for the lookup tables."""

from typing import Type, TypeVar

from ...core.entities import (
    CyclistGender,
    LookupRecord,
    RaceCategory,
    RaceCategoryGender,
    RaceCategoryLength,
    RaceRanking,
    Role,
)
from ..database.rows import LookupRow, RaceRankingRow
from .common import map_timestamps, public_id

L = TypeVar("L", bound=LookupRecord)


def _adapt_lookup(row: LookupRow, record_type: Type[L]) -> L:
    created_at, updated_at = map_timestamps(row)
    return record_type(
        id=public_id(row),
        name=row["name"],
        created_at=created_at,
        updated_at=updated_at,
    )


def adapt_race_category(row: LookupRow) -> RaceCategory:
    return _adapt_lookup(row, RaceCategory)


def adapt_race_category_gender(row: LookupRow) -> RaceCategoryGender:
    return _adapt_lookup(row, RaceCategoryGender)


def adapt_race_category_length(row: LookupRow) -> RaceCategoryLength:
    return _adapt_lookup(row, RaceCategoryLength)


def adapt_cyclist_gender(row: LookupRow) -> CyclistGender:
    return _adapt_lookup(row, CyclistGender)


def adapt_role(row: LookupRow) -> Role:
    return _adapt_lookup(row, Role)


def adapt_race_ranking(row: RaceRankingRow) -> RaceRanking:
    created_at, updated_at = map_timestamps(row)
    return RaceRanking(
        id=public_id(row),
        name=row["name"],
        description=row.get("description"),
        created_at=created_at,
        updated_at=updated_at,
    )

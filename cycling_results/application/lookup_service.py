"""Lookup table queries."""

from typing import List

from ..adapters.database.manager import DatabaseManager
from ..adapters.mapping import (
    adapt_cyclist_gender,
    adapt_race_category,
    adapt_race_category_gender,
    adapt_race_category_length,
    adapt_race_ranking,
    adapt_role,
)
from ..core.entities import (
    CyclistGender,
    RaceCategory,
    RaceCategoryGender,
    RaceCategoryLength,
    RaceRanking,
    Role,
)


class LookupService:
    """Serves the small fixed tables, each ordered by name."""

    def __init__(self, database: DatabaseManager):
        self.database = database

    async def get_race_categories(self) -> List[RaceCategory]:
        rows = await self.database.fetch_lookup_rows("race_categories")
        return [adapt_race_category(row) for row in rows]

    async def get_race_category_genders(self) -> List[RaceCategoryGender]:
        rows = await self.database.fetch_lookup_rows("race_category_genders")
        return [adapt_race_category_gender(row) for row in rows]

    async def get_race_category_lengths(self) -> List[RaceCategoryLength]:
        rows = await self.database.fetch_lookup_rows("race_category_lengths")
        return [adapt_race_category_length(row) for row in rows]

    async def get_race_rankings(self) -> List[RaceRanking]:
        rows = await self.database.fetch_lookup_rows("race_rankings")
        return [adapt_race_ranking(row) for row in rows]

    async def get_cyclist_genders(self) -> List[CyclistGender]:
        rows = await self.database.fetch_lookup_rows("cyclist_genders")
        return [adapt_cyclist_gender(row) for row in rows]

    async def get_roles(self) -> List[Role]:
        rows = await self.database.fetch_lookup_rows("roles")
        return [adapt_role(row) for row in rows]

"""Race result resolution.

Turns the public identifiers of a race (event, category, gender, length)
into the race with its results, and serves cyclist result histories.
"""

from typing import List, Optional

import structlog

from ..adapters.database.manager import DatabaseManager
from ..adapters.mapping import adapt_cyclist_with_results, adapt_race_with_results
from ..core.entities import CyclistWithResults, RaceResult, RaceWithResults
from .identifier_resolver import IdentifierResolver, RacePublicIds

logger = structlog.get_logger()


class RaceResultsService:
    """Resolves races and cyclist histories from public identifiers."""

    def __init__(self, database: DatabaseManager, resolver: Optional[IdentifierResolver] = None):
        self.database = database
        self.resolver = resolver or IdentifierResolver(database)

    async def resolve_race(
        self,
        event_id: str,
        race_category_id: str,
        race_category_gender_id: str,
        race_category_length_id: str,
    ) -> Optional[RaceWithResults]:
        """The race of an event for a category/gender/length, with its results.

        Results are ordered by ascending place as delivered by the store.
        Returns None when any identifier is unknown or when the event holds no
        race for that combination.

        Raises:
            DataStoreError: the store failed
        """
        keys = await self.resolver.resolve(
            RacePublicIds(
                event_id=event_id,
                race_category_id=race_category_id,
                race_category_gender_id=race_category_gender_id,
                race_category_length_id=race_category_length_id,
            )
        )
        if keys is None:
            logger.info(
                "Race identifiers did not resolve",
                event_id=event_id,
                race_category_id=race_category_id,
                race_category_gender_id=race_category_gender_id,
                race_category_length_id=race_category_length_id,
            )
            return None

        row = await self.database.fetch_race_with_results(
            keys.event_id,
            keys.race_category_id,
            keys.race_category_gender_id,
            keys.race_category_length_id,
        )
        if row is None:
            logger.info(
                "No race for category combination",
                event_id=event_id,
                race_category_id=race_category_id,
                race_category_gender_id=race_category_gender_id,
                race_category_length_id=race_category_length_id,
            )
            return None

        race = adapt_race_with_results(row)
        logger.info("Resolved race", race_id=race.id, result_count=len(race.race_results))
        return race

    async def get_cyclist_with_results(self, user_id: str) -> Optional[CyclistWithResults]:
        """A cyclist's profile with every result, most recent event first."""
        row = await self.database.fetch_cyclist_with_results(user_id)
        if row is None:
            logger.info("Cyclist not found", user_id=user_id)
            return None
        return adapt_cyclist_with_results(row)

    async def get_race_results_by_cyclist(self, user_id: str) -> List[RaceResult]:
        """A cyclist's results, or [] for an unknown cyclist."""
        cyclist = await self.get_cyclist_with_results(user_id)
        return cyclist.race_results if cyclist else []

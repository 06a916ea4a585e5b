"""Resolves the public keys of a race's coordinates to internal keys."""

import asyncio
from dataclasses import dataclass
from typing import Optional

import structlog

from ..adapters.database.manager import DatabaseManager
from ..core.errors import RowNotFoundError

logger = structlog.get_logger()


@dataclass(frozen=True)
class RacePublicIds:
    """Public keys identifying a race: its event and category triple."""

    event_id: str
    race_category_id: str
    race_category_gender_id: str
    race_category_length_id: str


@dataclass(frozen=True)
class RaceKeys:
    """Internal keys matching a RacePublicIds."""

    event_id: str
    race_category_id: str
    race_category_gender_id: str
    race_category_length_id: str


class IdentifierResolver:
    """Looks up the four internal keys of a race concurrently."""

    def __init__(self, database: DatabaseManager):
        self.database = database

    async def _lookup(self, table: str, public_id: str) -> Optional[str]:
        try:
            return await self.database.get_internal_key(table, public_id)
        except RowNotFoundError:
            logger.info("Public identifier not found", table=table, public_id=public_id)
            return None

    async def resolve(self, ids: RacePublicIds) -> Optional[RaceKeys]:
        """Resolve all four public keys, or None if any of them is unknown.

        The lookups run in one task group, so a store failure in one of them
        cancels the others. The failure is re-raised as is.

        Raises:
            DataStoreError: a lookup failed for a reason other than "no rows"
        """
        try:
            async with asyncio.TaskGroup() as group:
                event = group.create_task(self._lookup("events", ids.event_id))
                category = group.create_task(
                    self._lookup("race_categories", ids.race_category_id)
                )
                gender = group.create_task(
                    self._lookup("race_category_genders", ids.race_category_gender_id)
                )
                length = group.create_task(
                    self._lookup("race_category_lengths", ids.race_category_length_id)
                )
        except ExceptionGroup as group_error:
            raise group_error.exceptions[0]

        keys = (event.result(), category.result(), gender.result(), length.result())
        if any(key is None for key in keys):
            return None

        return RaceKeys(*keys)

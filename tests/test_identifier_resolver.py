"""Tests for the concurrent identifier resolver."""

import asyncio

import pytest

from cycling_results.application.identifier_resolver import (
    IdentifierResolver,
    RaceKeys,
    RacePublicIds,
)
from cycling_results.core.errors import DataStoreError, RowNotFoundError

PUBLIC_IDS = RacePublicIds("evt-spring", "cat-elite", "gen-male", "len-long")


def _keys_by_public_id(missing=()):
    async def lookup(table, public_id):
        if public_id in missing:
            raise RowNotFoundError(table, public_id)
        return f"uuid-{public_id}"

    return lookup


class TestIdentifierResolver:
    """Test cases for IdentifierResolver.resolve."""

    @pytest.mark.asyncio
    async def test_all_identifiers_resolve(self, mock_database):
        mock_database.get_internal_key.side_effect = _keys_by_public_id()

        keys = await IdentifierResolver(mock_database).resolve(PUBLIC_IDS)

        assert keys == RaceKeys("uuid-evt-spring", "uuid-cat-elite", "uuid-gen-male", "uuid-len-long")
        assert mock_database.get_internal_key.await_count == 4
        tables = {call.args[0] for call in mock_database.get_internal_key.await_args_list}
        assert tables == {"events", "race_categories", "race_category_genders", "race_category_lengths"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["evt-spring", "cat-elite", "gen-male", "len-long"])
    async def test_any_unknown_identifier_yields_none(self, mock_database, missing):
        mock_database.get_internal_key.side_effect = _keys_by_public_id(missing=(missing,))

        assert await IdentifierResolver(mock_database).resolve(PUBLIC_IDS) is None

    @pytest.mark.asyncio
    async def test_lookups_run_concurrently(self, mock_database):
        started = 0
        all_started = asyncio.Event()

        async def lookup(table, public_id):
            nonlocal started
            started += 1
            if started == 4:
                all_started.set()
            # Only returns once every lookup is in flight
            await asyncio.wait_for(all_started.wait(), timeout=1)
            return f"uuid-{public_id}"

        mock_database.get_internal_key.side_effect = lookup

        keys = await IdentifierResolver(mock_database).resolve(PUBLIC_IDS)

        assert keys is not None
        assert started == 4

    @pytest.mark.asyncio
    async def test_store_failure_propagates_unwrapped(self, mock_database):
        error = DataStoreError("connection refused")

        async def lookup(table, public_id):
            if table == "race_category_genders":
                raise error
            return f"uuid-{public_id}"

        mock_database.get_internal_key.side_effect = lookup

        with pytest.raises(DataStoreError) as exc_info:
            await IdentifierResolver(mock_database).resolve(PUBLIC_IDS)

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_store_failure_cancels_sibling_lookups(self, mock_database):
        cancelled = []

        async def lookup(table, public_id):
            if table == "events":
                await asyncio.sleep(0)
                raise DataStoreError("timeout")
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.append(table)
                raise
            return f"uuid-{public_id}"

        mock_database.get_internal_key.side_effect = lookup

        with pytest.raises(DataStoreError):
            await IdentifierResolver(mock_database).resolve(PUBLIC_IDS)

        assert sorted(cancelled) == ["race_categories", "race_category_genders", "race_category_lengths"]

"""Adapters for cyclist profile responses."""

from ...core.entities import Cyclist, CyclistWithResults
from ..database.rows import CyclistWithResultsRow
from .common import map_timestamps, public_id
from .race_results import flatten_cyclist_results


def adapt_cyclist(row: CyclistWithResultsRow) -> Cyclist:
    """Adapt the ``user`` + ``cyclist`` + ``gender`` triple of a profile row.

    The cyclist is identified by its user's public key.
    """
    user = row["user"]
    cyclist = row["cyclist"]
    gender = row.get("gender")
    created_at, updated_at = map_timestamps(user)
    email = user.get("email")

    return Cyclist(
        id=public_id(user),
        first_name=user["first_name"],
        last_name=user.get("last_name") or "",
        email=email,
        display_name=user.get("display_name"),
        has_auth=email is not None,
        gender_name=gender["name"] if gender else None,
        born_year=cyclist.get("born_year"),
        created_at=created_at,
        updated_at=updated_at,
    )


def adapt_cyclist_with_results(row: CyclistWithResultsRow) -> CyclistWithResults:
    return CyclistWithResults(
        cyclist=adapt_cyclist(row),
        race_results=flatten_cyclist_results(row.get("race_results")),
    )

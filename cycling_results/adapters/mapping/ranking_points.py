"""Adapter for ranking point rows."""

from typing import Optional

from ...core.entities import RankingPoint
from ..database.rows import RankingPointRow
from .common import map_timestamps, public_id


def adapt_ranking_point(row: RankingPointRow) -> RankingPoint:
    created_at, updated_at = map_timestamps(row)
    return RankingPoint(
        id=public_id(row),
        place=row["place"],
        points=row["points"],
        race_ranking_id=row["race_ranking_id"],
        created_at=created_at,
        updated_at=updated_at,
    )


def adapt_optional_ranking_point(row: Optional[RankingPointRow]) -> Optional[RankingPoint]:
    """Ranking point of a result row, or None when the result scored none."""
    if row is None:
        return None
    return adapt_ranking_point(row)

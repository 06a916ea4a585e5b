"""Helpers shared by every row adapter."""

from datetime import datetime, timezone
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple, TypeVar

import structlog

logger = structlog.get_logger()

T = TypeVar("T")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def to_iso(value: Any) -> Optional[str]:
    """Render a timestamp column as an ISO-8601 string, keeping None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def map_timestamps(row: Mapping[str, Any]) -> Tuple[str, str]:
    """``(created_at, updated_at)`` of a row, defaulting missing values to now."""
    created_at = to_iso(row.get("created_at"))
    updated_at = to_iso(row.get("updated_at"))
    return created_at or _now_iso(), updated_at or _now_iso()


def adapt_array(rows: Optional[Iterable[Mapping[str, Any]]], adapter: Callable[..., T]) -> List[T]:
    """Adapt every row of a collection. A missing collection is empty."""
    if rows is None:
        return []
    return [adapter(row) for row in rows]


def public_id(row: Mapping[str, Any]) -> str:
    """Public key of a row.

    Falls back to the internal key for legacy procedure payloads that do
    not carry ``short_id``.
    """
    short_id = row.get("short_id")
    if short_id is not None:
        return short_id
    logger.debug("Row without public key, using internal key", id=row.get("id"))
    return row["id"]

"""Adapters for organization and invitation rows."""

from typing import Any, Dict, Mapping

from ...core.entities import Organization, OrganizationInvitation
from ...core.enums import InvitationStatus, OrganizationState
from ..database.rows import OrganizationInvitationRow, OrganizationRow
from .common import map_timestamps, public_id, to_iso

ORGANIZATION_UPDATE_COLUMNS = ("name", "description", "state")


def adapt_organization(row: OrganizationRow) -> Organization:
    """Adapt an organization row. ``event_count`` is kept only when aggregated."""
    created_at, updated_at = map_timestamps(row)
    return Organization(
        id=public_id(row),
        name=row["name"],
        description=row.get("description"),
        state=OrganizationState(row["state"]),
        created_at=created_at,
        updated_at=updated_at,
        event_count=row.get("event_count"),
    )


def adapt_organization_invitation(
    row: OrganizationInvitationRow, organization_public_id: str
) -> OrganizationInvitation:
    """Adapt an invitation row.

    The row's ``organization_id`` is an internal key, so the caller passes the
    organization's public key to project instead.
    """
    created_at, updated_at = map_timestamps(row)
    return OrganizationInvitation(
        id=public_id(row),
        organization_id=organization_public_id,
        email=row["email"],
        invited_owner_name=row["invited_owner_name"],
        retry_count=row.get("retry_count") or 0,
        last_invitation_sent_at=to_iso(row.get("last_invitation_sent_at")),
        status=InvitationStatus(row["status"]),
        created_at=created_at,
        updated_at=updated_at,
    )


def organization_updates_to_row(updates: Mapping[str, Any]) -> Dict[str, Any]:
    """Column values for a partial organization update, emitting only provided fields."""
    row: Dict[str, Any] = {}
    for column in ORGANIZATION_UPDATE_COLUMNS:
        if column not in updates:
            continue
        value = updates[column]
        if isinstance(value, OrganizationState):
            value = value.value
        row[column] = value
    return row

"""Organization queries."""

from typing import Any, List, Mapping, Optional

import structlog

from ..adapters.database.manager import DatabaseManager
from ..adapters.mapping import (
    adapt_organization,
    adapt_organization_invitation,
    build_organization_member,
    organization_updates_to_row,
)
from ..core.entities import Organization, OrganizationInvitation, Organizer
from ..core.errors import RowNotFoundError

logger = structlog.get_logger()


class OrganizationService:
    def __init__(self, database: DatabaseManager):
        self.database = database

    async def get_all_organizations(self) -> List[Organization]:
        """Every organization with its event count, ordered by name."""
        rows = await self.database.fetch_organizations()
        return [adapt_organization(row) for row in rows]

    async def get_organization(self, organization_id: str) -> Optional[Organization]:
        row = await self.database.fetch_organization(organization_id)
        if row is None:
            logger.info("Organization not found", organization_id=organization_id)
            return None
        return adapt_organization(row)

    async def update_organization(
        self, organization_id: str, updates: Mapping[str, Any]
    ) -> Optional[Organization]:
        """Apply a partial update of name, description or state; None for an unknown organization."""
        row = await self.database.update_organization(
            organization_id, organization_updates_to_row(updates)
        )
        if row is None:
            logger.info("Organization not found", organization_id=organization_id)
            return None
        return adapt_organization(row)

    async def get_organizers(self, organization_id: str) -> List[Organizer]:
        """Members of an organization, most recently added first.

        Raises:
            InvalidUserRecordError: a member's user does not hold an organizer role
        """
        try:
            key = await self.database.get_internal_key("organizations", organization_id)
        except RowNotFoundError:
            logger.info("Organization not found", organization_id=organization_id)
            return []

        rows = await self.database.fetch_organizers(key)
        return [build_organization_member(row) for row in rows]

    async def get_invitations(self, organization_id: str) -> List[OrganizationInvitation]:
        """Owner invitations sent for an organization, most recent first."""
        try:
            key = await self.database.get_internal_key("organizations", organization_id)
        except RowNotFoundError:
            logger.info("Organization not found", organization_id=organization_id)
            return []

        rows = await self.database.fetch_invitations(key)
        return [adapt_organization_invitation(row, organization_id) for row in rows]

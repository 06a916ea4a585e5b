"""Authenticated user queries and owner onboarding."""

from typing import Optional

import structlog

from ..adapters.database.manager import DatabaseManager
from ..adapters.mapping import build_user, build_user_from_relations
from ..core.entities import SetupCompletion, User

logger = structlog.get_logger()


class UserService:
    def __init__(self, database: DatabaseManager):
        self.database = database

    async def get_auth_user(self, auth_user_id: str) -> Optional[User]:
        """The user linked to an identity-provider account, or None.

        Raises:
            InvalidUserRecordError: the user's row does not match its role
            DataStoreError: the store failed
        """
        row = await self.database.fetch_auth_user(auth_user_id)
        if row is None:
            logger.info("No user linked to identity", auth_user_id=auth_user_id)
            return None
        return build_user(row)

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        row = await self.database.fetch_user_with_relations(short_id=user_id)
        if row is None:
            logger.info("User not found", user_id=user_id)
            return None
        return build_user_from_relations(row)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        row = await self.database.fetch_user_with_relations(email=email)
        if row is None:
            logger.info("User not found by email")
            return None
        return build_user_from_relations(row)

    async def complete_organizer_owner_setup(
        self,
        auth_user_id: str,
        first_name: str,
        last_name: str,
        email: str,
    ) -> Optional[SetupCompletion]:
        """Link an invited owner to their organization and activate it.

        Updates the profile, links the organizer, accepts the invitation and
        activates the organization in a single procedure call. Returns None
        when there is no pending invitation for the email.

        Raises:
            DataStoreError: the organization is missing or the procedure failed
        """
        row = await self.database.complete_organizer_owner_setup(
            auth_user_id, first_name, last_name, email
        )
        if row is None:
            logger.info("No pending invitation for owner setup", auth_user_id=auth_user_id)
            return None

        completion = SetupCompletion(
            success=bool(row["success"]),
            organization_id=row.get("organization_id"),
            user_id=row.get("user_id"),
        )
        logger.info(
            "Organizer owner setup completed",
            organization_id=completion.organization_id,
            user_id=completion.user_id,
        )
        return completion

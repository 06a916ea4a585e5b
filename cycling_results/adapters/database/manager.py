"""Database infrastructure layer.

Query methods return raw rows (dicts keyed by column name, nested where the
query embeds related records). Translation into domain records happens in
``cycling_results.adapters.mapping``.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Mapping, Optional, Sequence

from sqlalchemy import func, inspect, select, text
from sqlalchemy.exc import DBAPIError, NoResultFound, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import selectinload
from sqlalchemy.pool import NullPool

from ...config import Config
from ...core.errors import DataStoreError, RowNotFoundError
from .models import (
    Base,
    Cyclist as CyclistModel,
    CyclistGender as CyclistGenderModel,
    Event as EventModel,
    Organization as OrganizationModel,
    OrganizationInvitation as OrganizationInvitationModel,
    Organizer as OrganizerModel,
    Race as RaceModel,
    RaceCategory as RaceCategoryModel,
    RaceCategoryGender as RaceCategoryGenderModel,
    RaceCategoryLength as RaceCategoryLengthModel,
    RaceRanking as RaceRankingModel,
    RaceResult as RaceResultModel,
    Role as RoleModel,
    User as UserModel,
)
from .rows import (
    AuthUserRow,
    CyclistRaceResultRow,
    CyclistWithResultsRow,
    EventRow,
    EventWithRaceCountRow,
    EventWithRacesRow,
    LookupRow,
    OrganizationInvitationRow,
    OrganizationMemberRow,
    OrganizationRow,
    RaceDetailResultRow,
    RaceWithResultsRow,
    SetupCompletionRow,
    UserWithRelationsRow,
)

logger = logging.getLogger(__name__)

# SQLSTATE codes raised by complete_organizer_owner_setup()
SQLSTATE_NO_DATA_FOUND = "P0002"
SQLSTATE_INVALID_AUTHORIZATION = "28000"

# Tables whose rows can be addressed by public key
PUBLIC_KEY_TABLES = {
    model.__tablename__: model
    for model in (
        CyclistModel,
        EventModel,
        OrganizationModel,
        RaceModel,
        RaceCategoryModel,
        RaceCategoryGenderModel,
        RaceCategoryLengthModel,
        RaceRankingModel,
        UserModel,
    )
}

LOOKUP_TABLES = {
    model.__tablename__: model
    for model in (
        RaceCategoryModel,
        RaceCategoryGenderModel,
        RaceCategoryLengthModel,
        RaceRankingModel,
        CyclistGenderModel,
        RoleModel,
    )
}


def _row(record: Any) -> Optional[Dict[str, Any]]:
    """Column values of an ORM instance as a plain dict."""
    if record is None:
        return None
    return {attr.key: getattr(record, attr.key) for attr in inspect(record).mapper.column_attrs}


def _sqlstate(error: DBAPIError) -> Optional[str]:
    """SQLSTATE of the driver exception (asyncpg/psycopg expose ``sqlstate``, psycopg2 ``pgcode``)."""
    orig = error.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


class DatabaseManager:
    """Manages the database connection and provides the store queries."""

    def __init__(self, config: Config):
        self.config = config
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    async def initialize(self) -> None:
        """Initialize database engine and session factory."""
        if self._engine is not None:
            logger.warning("Database manager already initialized")
            return

        self._engine = create_async_engine(
            self.config.get_database_url(),
            echo=self.config.database_echo,
            poolclass=NullPool,
            pool_pre_ping=self.config.database_pool_pre_ping,
        )

        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        logger.info("Database manager initialized successfully")

    async def close(self) -> None:
        """Close database engine and clean up resources."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database manager closed")

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get a database session with automatic cleanup."""
        if self._session_factory is None:
            raise RuntimeError(
                "Database manager not initialized. Call initialize() first."
            )

        async with self._session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    @asynccontextmanager
    async def _store_session(self, operation: str) -> AsyncGenerator[AsyncSession, None]:
        """Session whose SQLAlchemy failures surface as DataStoreError."""
        try:
            async with self.get_session() as session:
                yield session
        except SQLAlchemyError as e:
            logger.error(f"Data store failure in {operation}: {e}")
            raise DataStoreError(f"{operation} failed: {e}") from e

    async def create_tables(self) -> None:
        """Create all tables from the models (tests and local development)."""
        if self._engine is None:
            raise RuntimeError("Database manager not initialized. Call initialize() first.")
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_tables(self) -> None:
        """Drop all tables created from the models."""
        if self._engine is None:
            raise RuntimeError("Database manager not initialized. Call initialize() first.")
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    # Identifier lookups

    async def get_internal_key(self, table: str, public_id: str) -> str:
        """Internal key of the row of ``table`` whose public key is ``public_id``.

        Raises:
            RowNotFoundError: no row carries that public key
            DataStoreError: any other store failure
        """
        model = PUBLIC_KEY_TABLES[table]
        async with self._store_session(f"lookup {table}") as session:
            result = await session.execute(select(model.id).where(model.short_id == public_id))
            try:
                return result.scalar_one()
            except NoResultFound as e:
                raise RowNotFoundError(table, public_id) from e

    # Races and results

    def _race_detail_result_row(self, result: RaceResultModel) -> RaceDetailResultRow:
        cyclist = result.cyclist
        return {
            **_row(result),
            "cyclist": {**_row(cyclist), "user": _row(cyclist.user)},
            "ranking_point": _row(result.ranking_point),
        }

    def _cyclist_race_result_row(self, result: RaceResultModel) -> CyclistRaceResultRow:
        race = result.race
        return {
            **_row(result),
            "race": {
                **_row(race),
                "event": _row(race.event),
                "race_category": _row(race.race_category),
                "race_category_gender": _row(race.race_category_gender),
                "race_category_length": _row(race.race_category_length),
                "race_ranking": _row(race.race_ranking),
            },
            "ranking_point": _row(result.ranking_point),
        }

    async def fetch_race_with_results(
        self,
        event_id: str,
        race_category_id: str,
        race_category_gender_id: str,
        race_category_length_id: str,
    ) -> Optional[RaceWithResultsRow]:
        """The race matching all four internal keys, with its results by ascending place.

        Each result embeds its cyclist (with user) and ranking point.
        """
        async with self._store_session("fetch race with results") as session:
            result = await session.execute(
                select(RaceModel)
                .where(
                    RaceModel.event_id == event_id,
                    RaceModel.race_category_id == race_category_id,
                    RaceModel.race_category_gender_id == race_category_gender_id,
                    RaceModel.race_category_length_id == race_category_length_id,
                )
                .options(
                    selectinload(RaceModel.race_results).selectinload(RaceResultModel.cyclist).selectinload(CyclistModel.user),
                    selectinload(RaceModel.race_results).selectinload(RaceResultModel.ranking_point),
                )
            )
            race = result.scalar_one_or_none()
            if race is None:
                return None

            return {
                **_row(race),
                "race_results": [self._race_detail_result_row(r) for r in race.race_results],
            }

    async def fetch_cyclist_with_results(self, user_public_id: str) -> Optional[CyclistWithResultsRow]:
        """A cyclist's user, profile and results, most recent event first."""
        async with self._store_session("fetch cyclist with results") as session:
            result = await session.execute(
                select(UserModel)
                .where(UserModel.short_id == user_public_id)
                .options(selectinload(UserModel.cyclist).selectinload(CyclistModel.gender))
            )
            user = result.scalar_one_or_none()
            if user is None or user.cyclist is None:
                return None

            results = await session.execute(
                select(RaceResultModel)
                .join(RaceModel, RaceResultModel.race_id == RaceModel.id)
                .join(EventModel, RaceModel.event_id == EventModel.id)
                .where(RaceResultModel.cyclist_id == user.cyclist.id)
                .order_by(EventModel.date_time.desc(), RaceModel.date_time.desc())
                .options(
                    selectinload(RaceResultModel.race).selectinload(RaceModel.event),
                    selectinload(RaceResultModel.race).selectinload(RaceModel.race_category),
                    selectinload(RaceResultModel.race).selectinload(RaceModel.race_category_gender),
                    selectinload(RaceResultModel.race).selectinload(RaceModel.race_category_length),
                    selectinload(RaceResultModel.race).selectinload(RaceModel.race_ranking),
                    selectinload(RaceResultModel.ranking_point),
                )
            )

            return {
                "user": _row(user),
                "cyclist": _row(user.cyclist),
                "gender": _row(user.cyclist.gender),
                "race_results": [
                    self._cyclist_race_result_row(r) for r in results.scalars().all()
                ],
            }

    # Users

    async def fetch_auth_user(self, auth_user_id: str) -> Optional[AuthUserRow]:
        """Flat session row of the user linked to an identity-provider account.

        ``cyclist_id``, ``organizer_id`` and ``organization_id`` are public keys.
        """
        async with self._store_session("fetch auth user") as session:
            result = await session.execute(
                select(
                    UserModel.id,
                    UserModel.short_id,
                    UserModel.first_name,
                    UserModel.last_name,
                    UserModel.email,
                    UserModel.display_name,
                    UserModel.created_at,
                    UserModel.updated_at,
                    RoleModel.name.label("role_name"),
                    CyclistModel.short_id.label("cyclist_id"),
                    CyclistModel.born_year.label("cyclist_born_year"),
                    CyclistGenderModel.name.label("cyclist_gender_name"),
                    OrganizerModel.short_id.label("organizer_id"),
                    OrganizationModel.short_id.label("organization_id"),
                )
                .join(RoleModel, UserModel.role_id == RoleModel.id)
                .outerjoin(CyclistModel, CyclistModel.user_id == UserModel.id)
                .outerjoin(CyclistGenderModel, CyclistModel.gender_id == CyclistGenderModel.id)
                .outerjoin(OrganizerModel, OrganizerModel.user_id == UserModel.id)
                .outerjoin(OrganizationModel, OrganizerModel.organization_id == OrganizationModel.id)
                .where(UserModel.auth_user_id == auth_user_id)
            )
            row = result.mappings().one_or_none()
            return dict(row) if row is not None else None

    async def fetch_user_with_relations(
        self,
        short_id: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Optional[UserWithRelationsRow]:
        """Nested user row (role, cyclist, organizer with organization) by public key or email."""
        if (short_id is None) == (email is None):
            raise ValueError("Exactly one of short_id or email is required")

        condition = UserModel.short_id == short_id if short_id is not None else UserModel.email == email
        async with self._store_session("fetch user with relations") as session:
            result = await session.execute(
                select(UserModel)
                .where(condition)
                .options(
                    selectinload(UserModel.role),
                    selectinload(UserModel.cyclist).selectinload(CyclistModel.gender),
                    selectinload(UserModel.organizer).selectinload(OrganizerModel.organization),
                )
            )
            user = result.scalar_one_or_none()
            if user is None:
                return None

            cyclist = None
            if user.cyclist is not None:
                cyclist = {**_row(user.cyclist), "gender": _row(user.cyclist.gender)}
            organizer = None
            if user.organizer is not None:
                organizer = {**_row(user.organizer), "organization": _row(user.organizer.organization)}

            return {**_row(user), "role": _row(user.role), "cyclist": cyclist, "organizer": organizer}

    async def complete_organizer_owner_setup(
        self,
        auth_user_id: str,
        first_name: str,
        last_name: str,
        invitation_email: str,
    ) -> Optional[SetupCompletionRow]:
        """Run the owner setup procedure in one round trip.

        Returns None when no pending invitation exists for the email.

        Raises:
            DataStoreError: organization missing, empty procedure result or
                any other store failure
        """
        async with self.get_session() as session:
            try:
                result = await session.execute(
                    text(
                        "SELECT * FROM complete_organizer_owner_setup("
                        ":p_auth_user_id, :p_first_name, :p_last_name, :p_invitation_email)"
                    ),
                    {
                        "p_auth_user_id": auth_user_id,
                        "p_first_name": first_name,
                        "p_last_name": last_name,
                        "p_invitation_email": invitation_email,
                    },
                )
                row = result.mappings().first()
                await session.commit()
            except DBAPIError as e:
                sqlstate = _sqlstate(e)
                if sqlstate == SQLSTATE_NO_DATA_FOUND:
                    logger.info(f"No pending invitation for {invitation_email}")
                    return None
                if sqlstate == SQLSTATE_INVALID_AUTHORIZATION:
                    raise DataStoreError("Organization not found for invitation") from e
                raise DataStoreError(f"Error completing organizer owner setup: {e}") from e
            except SQLAlchemyError as e:
                raise DataStoreError(f"Error completing organizer owner setup: {e}") from e

        if row is None:
            raise DataStoreError("No data returned after completing organizer owner setup")
        return dict(row)

    # Events

    async def fetch_events_by_status(
        self,
        statuses: Sequence[str],
        year: Optional[int] = None,
        newest_first: bool = False,
    ) -> List[EventRow]:
        """Events in any of ``statuses``, optionally restricted to one year, ordered by date."""
        order = EventModel.date_time.desc() if newest_first else EventModel.date_time.asc()
        query = select(EventModel).where(EventModel.event_status.in_(statuses))
        if year is not None:
            query = query.where(EventModel.year == year)

        async with self._store_session("fetch events by status") as session:
            result = await session.execute(query.order_by(order))
            return [_row(event) for event in result.scalars().all()]

    async def fetch_event_with_races(self, public_id: str) -> Optional[EventWithRacesRow]:
        """Event with its races and supported categories, genders and lengths."""
        async with self._store_session("fetch event with races") as session:
            result = await session.execute(
                select(EventModel)
                .where(EventModel.short_id == public_id)
                .options(
                    selectinload(EventModel.races),
                    selectinload(EventModel.supported_categories),
                    selectinload(EventModel.supported_genders),
                    selectinload(EventModel.supported_lengths),
                )
            )
            event = result.scalar_one_or_none()
            if event is None:
                return None

            return {
                **_row(event),
                "races": [_row(race) for race in event.races],
                "supported_categories": [_row(c) for c in event.supported_categories],
                "supported_genders": [_row(g) for g in event.supported_genders],
                "supported_lengths": [_row(length) for length in event.supported_lengths],
            }

    async def update_event(self, public_id: str, values: Mapping[str, Any]) -> Optional[EventRow]:
        """Apply a partial column update to an event and return the stored row.

        ``year`` follows ``date_time`` when the date changes. Returns None when
        no event carries the public key.
        """
        async with self._store_session("update event") as session:
            result = await session.execute(select(EventModel).where(EventModel.short_id == public_id))
            event = result.scalar_one_or_none()
            if event is None:
                return None

            for column, value in values.items():
                setattr(event, column, value)
            if "date_time" in values:
                event.year = event.date_time.year

            await session.commit()
            await session.refresh(event)
            logger.info(f"Updated event {public_id}: {sorted(values)}")
            return _row(event)

    async def fetch_events_by_organization(self, organization_id: str) -> List[EventWithRaceCountRow]:
        """An organization's events with their race count, newest first."""
        race_count = (
            select(func.count(RaceModel.id))
            .where(RaceModel.event_id == EventModel.id)
            .correlate(EventModel)
            .scalar_subquery()
        )
        async with self._store_session("fetch events by organization") as session:
            result = await session.execute(
                select(EventModel, race_count.label("race_count"))
                .where(EventModel.organization_id == organization_id)
                .order_by(EventModel.date_time.desc())
            )
            return [{**_row(event), "race_count": count} for event, count in result.all()]

    # Organizations

    async def fetch_organizations(self) -> List[OrganizationRow]:
        """All organizations with their aggregated event count, ordered by name."""
        event_count = (
            select(func.count(EventModel.id))
            .where(EventModel.organization_id == OrganizationModel.id)
            .correlate(OrganizationModel)
            .scalar_subquery()
        )
        async with self._store_session("fetch organizations") as session:
            result = await session.execute(
                select(OrganizationModel, event_count.label("event_count"))
                .order_by(OrganizationModel.name)
            )
            return [{**_row(org), "event_count": count} for org, count in result.all()]

    async def fetch_organization(self, public_id: str) -> Optional[OrganizationRow]:
        async with self._store_session("fetch organization") as session:
            result = await session.execute(
                select(OrganizationModel).where(OrganizationModel.short_id == public_id)
            )
            return _row(result.scalar_one_or_none())

    async def update_organization(
        self, public_id: str, values: Mapping[str, Any]
    ) -> Optional[OrganizationRow]:
        """Apply a partial column update to an organization; None when it does not exist."""
        async with self._store_session("update organization") as session:
            result = await session.execute(
                select(OrganizationModel).where(OrganizationModel.short_id == public_id)
            )
            organization = result.scalar_one_or_none()
            if organization is None:
                return None

            for column, value in values.items():
                setattr(organization, column, value)

            await session.commit()
            await session.refresh(organization)
            logger.info(f"Updated organization {public_id}: {sorted(values)}")
            return _row(organization)

    async def fetch_organizers(self, organization_id: str) -> List[OrganizationMemberRow]:
        """Organizer links of an organization with user, role and organization, newest first."""
        async with self._store_session("fetch organizers") as session:
            result = await session.execute(
                select(OrganizerModel)
                .where(OrganizerModel.organization_id == organization_id)
                .order_by(OrganizerModel.created_at.desc())
                .options(
                    selectinload(OrganizerModel.user).selectinload(UserModel.role),
                    selectinload(OrganizerModel.organization),
                )
            )
            return [
                {
                    **_row(organizer),
                    "user": {**_row(organizer.user), "role": _row(organizer.user.role)},
                    "organization": _row(organizer.organization),
                }
                for organizer in result.scalars().all()
            ]

    async def fetch_invitations(self, organization_id: str) -> List[OrganizationInvitationRow]:
        """Owner invitations of an organization, most recent first."""
        async with self._store_session("fetch invitations") as session:
            result = await session.execute(
                select(OrganizationInvitationModel)
                .where(OrganizationInvitationModel.organization_id == organization_id)
                .order_by(OrganizationInvitationModel.created_at.desc())
            )
            return [_row(invitation) for invitation in result.scalars().all()]

    # Lookups

    async def fetch_lookup_rows(self, table: str) -> List[LookupRow]:
        """All rows of a lookup table, ordered by name."""
        model = LOOKUP_TABLES[table]
        async with self._store_session(f"fetch {table}") as session:
            result = await session.execute(select(model).order_by(model.name))
            return [_row(record) for record in result.scalars().all()]

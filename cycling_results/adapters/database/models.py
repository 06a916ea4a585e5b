"""SQLAlchemy models for the cycling results store.

Every entity table carries two identifiers: ``id``, the internal key used for
joins and foreign keys, and ``short_id``, the short public key used in URLs.
"""

import secrets
import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column, relationship
from sqlalchemy.sql import func

Base = declarative_base()

PUBLIC_KEY_LENGTH = 10


def generate_internal_key() -> str:
    return str(uuid.uuid4())


def generate_public_key() -> str:
    """Short URL-safe public key."""
    return secrets.token_urlsafe(8)[:PUBLIC_KEY_LENGTH]


def _internal_key_column() -> Mapped[str]:
    return mapped_column(String(36), primary_key=True, default=generate_internal_key)


def _public_key_column() -> Mapped[str]:
    return mapped_column(
        String(PUBLIC_KEY_LENGTH), nullable=False, unique=True, default=generate_public_key
    )


def _created_at_column() -> Mapped[datetime]:
    return mapped_column(DateTime(timezone=True), nullable=False, default=func.now())


def _updated_at_column() -> Mapped[datetime]:
    return mapped_column(
        DateTime(timezone=True), nullable=False, default=func.now(), onupdate=func.now()
    )


# Lookup tables


class Role(Base):
    __tablename__ = "roles"

    id: Mapped[str] = _internal_key_column()
    short_id: Mapped[str] = _public_key_column()
    name: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    created_at: Mapped[datetime] = _created_at_column()
    updated_at: Mapped[datetime] = _updated_at_column()

    def __repr__(self) -> str:
        return f"<Role(name='{self.name}')>"


class CyclistGender(Base):
    __tablename__ = "cyclist_genders"

    id: Mapped[str] = _internal_key_column()
    short_id: Mapped[str] = _public_key_column()
    name: Mapped[str] = mapped_column(String(16), nullable=False, unique=True)
    created_at: Mapped[datetime] = _created_at_column()
    updated_at: Mapped[datetime] = _updated_at_column()


class RaceCategory(Base):
    __tablename__ = "race_categories"

    id: Mapped[str] = _internal_key_column()
    short_id: Mapped[str] = _public_key_column()
    name: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    created_at: Mapped[datetime] = _created_at_column()
    updated_at: Mapped[datetime] = _updated_at_column()


class RaceCategoryGender(Base):
    __tablename__ = "race_category_genders"

    id: Mapped[str] = _internal_key_column()
    short_id: Mapped[str] = _public_key_column()
    name: Mapped[str] = mapped_column(String(16), nullable=False, unique=True)
    created_at: Mapped[datetime] = _created_at_column()
    updated_at: Mapped[datetime] = _updated_at_column()


class RaceCategoryLength(Base):
    __tablename__ = "race_category_lengths"

    id: Mapped[str] = _internal_key_column()
    short_id: Mapped[str] = _public_key_column()
    name: Mapped[str] = mapped_column(String(16), nullable=False, unique=True)
    created_at: Mapped[datetime] = _created_at_column()
    updated_at: Mapped[datetime] = _updated_at_column()


class RaceRanking(Base):
    __tablename__ = "race_rankings"

    id: Mapped[str] = _internal_key_column()
    short_id: Mapped[str] = _public_key_column()
    name: Mapped[str] = mapped_column(String(16), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = _created_at_column()
    updated_at: Mapped[datetime] = _updated_at_column()


class RankingPoint(Base):
    """Points awarded per place in a ranking system. Immutable once seeded."""

    __tablename__ = "ranking_points"

    id: Mapped[str] = _internal_key_column()
    short_id: Mapped[str] = _public_key_column()
    race_ranking_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("race_rankings.id", ondelete="CASCADE"), nullable=False
    )
    place: Mapped[int] = mapped_column(Integer, nullable=False)
    points: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = _created_at_column()
    updated_at: Mapped[datetime] = _updated_at_column()

    __table_args__ = (
        UniqueConstraint("race_ranking_id", "place", name="uq_ranking_points_ranking_place"),
    )


# Users and organizations


class User(Base):
    """Application user.

    ``email`` and ``display_name`` mirror the identity provider's record and
    are null for cyclists that never signed in.
    """

    __tablename__ = "users"

    id: Mapped[str] = _internal_key_column()
    short_id: Mapped[str] = _public_key_column()
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, unique=True)
    display_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    auth_user_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, unique=True)
    role_id: Mapped[str] = mapped_column(String(36), ForeignKey("roles.id"), nullable=False)
    created_at: Mapped[datetime] = _created_at_column()
    updated_at: Mapped[datetime] = _updated_at_column()

    role: Mapped["Role"] = relationship("Role")
    cyclist: Mapped[Optional["Cyclist"]] = relationship(
        "Cyclist", back_populates="user", uselist=False
    )
    organizer: Mapped[Optional["Organizer"]] = relationship(
        "Organizer", back_populates="user", uselist=False
    )

    def __repr__(self) -> str:
        return f"<User(short_id='{self.short_id}', first_name='{self.first_name}')>"


class Cyclist(Base):
    __tablename__ = "cyclists"

    id: Mapped[str] = _internal_key_column()
    short_id: Mapped[str] = _public_key_column()
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    born_year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    gender_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("cyclist_genders.id"), nullable=True
    )
    created_at: Mapped[datetime] = _created_at_column()
    updated_at: Mapped[datetime] = _updated_at_column()

    user: Mapped["User"] = relationship("User", back_populates="cyclist")
    gender: Mapped[Optional["CyclistGender"]] = relationship("CyclistGender")
    race_results: Mapped[List["RaceResult"]] = relationship(
        "RaceResult", back_populates="cyclist", cascade="all, delete-orphan"
    )


class Organization(Base):
    __tablename__ = "organizations"

    id: Mapped[str] = _internal_key_column()
    short_id: Mapped[str] = _public_key_column()
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    state: Mapped[str] = mapped_column(String(20), nullable=False, default="ACTIVE")
    created_at: Mapped[datetime] = _created_at_column()
    updated_at: Mapped[datetime] = _updated_at_column()

    events: Mapped[List["Event"]] = relationship("Event", back_populates="organization")

    __table_args__ = (Index("idx_organizations_name", "name"),)


class Organizer(Base):
    """Links a user to the organization they belong to."""

    __tablename__ = "organizers"

    id: Mapped[str] = _internal_key_column()
    short_id: Mapped[str] = _public_key_column()
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    organization_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = _created_at_column()
    updated_at: Mapped[datetime] = _updated_at_column()

    user: Mapped["User"] = relationship("User", back_populates="organizer")
    organization: Mapped["Organization"] = relationship("Organization")


class OrganizationInvitation(Base):
    __tablename__ = "organization_invitations"

    id: Mapped[str] = _internal_key_column()
    short_id: Mapped[str] = _public_key_column()
    organization_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    invited_owner_name: Mapped[str] = mapped_column(String(200), nullable=False)
    retry_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_invitation_sent_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    created_at: Mapped[datetime] = _created_at_column()
    updated_at: Mapped[datetime] = _updated_at_column()

    __table_args__ = (Index("idx_organization_invitations_email_status", "email", "status"),)


# Events, races and results


class Event(Base):
    __tablename__ = "events"

    id: Mapped[str] = _internal_key_column()
    short_id: Mapped[str] = _public_key_column()
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    date_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    state: Mapped[str] = mapped_column(String(100), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    event_status: Mapped[str] = mapped_column(String(20), nullable=False, default="DRAFT")
    is_public_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    organization_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("organizations.id", ondelete="SET NULL"), nullable=True
    )
    created_by: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = _created_at_column()
    updated_at: Mapped[datetime] = _updated_at_column()

    organization: Mapped[Optional["Organization"]] = relationship(
        "Organization", back_populates="events"
    )
    races: Mapped[List["Race"]] = relationship(
        "Race", back_populates="event", cascade="all, delete-orphan", order_by="Race.date_time"
    )
    supported_categories: Mapped[List["RaceCategory"]] = relationship(
        "RaceCategory", secondary="event_supported_categories", order_by="RaceCategory.name"
    )
    supported_genders: Mapped[List["RaceCategoryGender"]] = relationship(
        "RaceCategoryGender", secondary="event_supported_genders", order_by="RaceCategoryGender.name"
    )
    supported_lengths: Mapped[List["RaceCategoryLength"]] = relationship(
        "RaceCategoryLength", secondary="event_supported_lengths", order_by="RaceCategoryLength.name"
    )

    __table_args__ = (
        Index("idx_events_status_year", "event_status", "year"),
        Index("idx_events_organization", "organization_id"),
    )


class EventSupportedCategory(Base):
    __tablename__ = "event_supported_categories"

    event_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("events.id", ondelete="CASCADE"), primary_key=True
    )
    race_category_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("race_categories.id", ondelete="CASCADE"), primary_key=True
    )


class EventSupportedGender(Base):
    __tablename__ = "event_supported_genders"

    event_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("events.id", ondelete="CASCADE"), primary_key=True
    )
    race_category_gender_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("race_category_genders.id", ondelete="CASCADE"), primary_key=True
    )


class EventSupportedLength(Base):
    __tablename__ = "event_supported_lengths"

    event_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("events.id", ondelete="CASCADE"), primary_key=True
    )
    race_category_length_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("race_category_lengths.id", ondelete="CASCADE"), primary_key=True
    )


class Race(Base):
    """A race of an event. At most one per (event, category, gender, length)."""

    __tablename__ = "races"

    id: Mapped[str] = _internal_key_column()
    short_id: Mapped[str] = _public_key_column()
    name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    date_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_public_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    event_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False
    )
    race_category_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("race_categories.id"), nullable=False
    )
    race_category_gender_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("race_category_genders.id"), nullable=False
    )
    race_category_length_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("race_category_lengths.id"), nullable=False
    )
    race_ranking_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("race_rankings.id"), nullable=False
    )
    created_at: Mapped[datetime] = _created_at_column()
    updated_at: Mapped[datetime] = _updated_at_column()

    event: Mapped["Event"] = relationship("Event", back_populates="races")
    race_category: Mapped["RaceCategory"] = relationship("RaceCategory")
    race_category_gender: Mapped["RaceCategoryGender"] = relationship("RaceCategoryGender")
    race_category_length: Mapped["RaceCategoryLength"] = relationship("RaceCategoryLength")
    race_ranking: Mapped["RaceRanking"] = relationship("RaceRanking")
    race_results: Mapped[List["RaceResult"]] = relationship(
        "RaceResult",
        back_populates="race",
        cascade="all, delete-orphan",
        order_by="RaceResult.place",
    )

    __table_args__ = (
        UniqueConstraint(
            "event_id",
            "race_category_id",
            "race_category_gender_id",
            "race_category_length_id",
            name="uq_races_event_category_gender_length",
        ),
    )


class RaceResult(Base):
    __tablename__ = "race_results"

    id: Mapped[str] = _internal_key_column()
    short_id: Mapped[str] = _public_key_column()
    race_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("races.id", ondelete="CASCADE"), nullable=False
    )
    cyclist_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("cyclists.id", ondelete="CASCADE"), nullable=False
    )
    place: Mapped[int] = mapped_column(Integer, nullable=False)
    time: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    ranking_point_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("ranking_points.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = _created_at_column()
    updated_at: Mapped[datetime] = _updated_at_column()

    race: Mapped["Race"] = relationship("Race", back_populates="race_results")
    cyclist: Mapped["Cyclist"] = relationship("Cyclist", back_populates="race_results")
    ranking_point: Mapped[Optional["RankingPoint"]] = relationship("RankingPoint")

    __table_args__ = (
        Index("idx_race_results_race_place", "race_id", "place"),
        Index("idx_race_results_cyclist", "cyclist_id"),
    )

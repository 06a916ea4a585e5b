"""Core enums for the cycling results layer."""

from enum import Enum
from typing import Optional


class RoleType(Enum):
    """Role discriminator stored in the roles table.

    PUBLIC exists in the database for anonymous visitors but is never an
    authenticated user shape.
    """

    ADMIN = "ADMIN"
    ORGANIZER_OWNER = "ORGANIZER_OWNER"
    ORGANIZER_STAFF = "ORGANIZER_STAFF"
    CYCLIST = "CYCLIST"
    PUBLIC = "PUBLIC"

    @property
    def is_organizer(self) -> bool:
        """Check if the role belongs to an organization member."""
        return self in (RoleType.ORGANIZER_OWNER, RoleType.ORGANIZER_STAFF)

    @classmethod
    def from_string(cls, value: Optional[str]) -> Optional["RoleType"]:
        """Convert a raw role name to a RoleType.

        Returns None for unknown or missing values.
        """
        for role in cls:
            if role.value == value:
                return role
        return None


class EventStatus(Enum):
    """Event lifecycle status.

    Statuses are declared in lifecycle order. Transitions are monotonic in
    time but enforcing them is up to the caller.
    """

    DRAFT = "DRAFT"
    AVAILABLE = "AVAILABLE"
    SOLD_OUT = "SOLD_OUT"
    ON_GOING = "ON_GOING"
    FINISHED = "FINISHED"

    @property
    def order(self) -> int:
        """Position of the status in the lifecycle."""
        return list(EventStatus).index(self)

    @property
    def is_upcoming(self) -> bool:
        """Events that can still be registered for."""
        return self in (EventStatus.AVAILABLE, EventStatus.SOLD_OUT)

    @property
    def is_past(self) -> bool:
        return self == EventStatus.FINISHED

    def precedes(self, other: "EventStatus") -> bool:
        """Check if this status comes before another in the lifecycle."""
        return self.order < other.order


class OrganizationState(Enum):
    """Organization lifecycle state."""

    WAITING_OWNER = "WAITING_OWNER"
    ACTIVE = "ACTIVE"
    DISABLED = "DISABLED"


class InvitationStatus(Enum):
    """Status of an organization owner invitation."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"


class RaceRankingName(Enum):
    """Ranking systems a race can score points in."""

    UCI = "UCI"
    NATIONAL = "NATIONAL"
    REGIONAL = "REGIONAL"
    CUSTOM = "CUSTOM"

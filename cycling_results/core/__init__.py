"""Core layer of the cycling results package.

This module provides the domain records, enums and exceptions shared by the
adapters and application services.
"""

from .entities import (
    Admin,
    Cyclist,
    CyclistGender,
    CyclistWithResults,
    Event,
    EventWithRaceCount,
    EventWithRaces,
    Organization,
    OrganizationInvitation,
    Organizer,
    Race,
    RaceCategory,
    RaceCategoryGender,
    RaceCategoryLength,
    RaceDetailResult,
    RaceRanking,
    RaceResult,
    RaceWithResults,
    RankingPoint,
    Role,
    SetupCompletion,
    User,
)
from .enums import (
    EventStatus,
    InvitationStatus,
    OrganizationState,
    RaceRankingName,
    RoleType,
)
from .errors import (
    CyclingResultsError,
    DataStoreError,
    InvalidUserRecordError,
    RowNotFoundError,
)

__all__ = [
    "Admin",
    "Cyclist",
    "CyclistGender",
    "CyclistWithResults",
    "Event",
    "EventWithRaceCount",
    "EventWithRaces",
    "Organization",
    "OrganizationInvitation",
    "Organizer",
    "Race",
    "RaceCategory",
    "RaceCategoryGender",
    "RaceCategoryLength",
    "RaceDetailResult",
    "RaceRanking",
    "RaceResult",
    "RaceWithResults",
    "RankingPoint",
    "Role",
    "SetupCompletion",
    "User",
    "EventStatus",
    "InvitationStatus",
    "OrganizationState",
    "RaceRankingName",
    "RoleType",
    "CyclingResultsError",
    "DataStoreError",
    "InvalidUserRecordError",
    "RowNotFoundError",
]

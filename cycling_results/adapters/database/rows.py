"""Shapes of the raw rows handed from the store to the mapping adapters.

Rows are plain dicts keyed by column name. Timestamps may arrive either as
``datetime`` objects (ORM/Core queries) or as ISO strings (procedure JSON
payloads); the adapters accept both. ``short_id`` is absent from some
legacy procedure payloads.
"""

from datetime import datetime
from typing import List, NotRequired, Optional, TypedDict, Union

Timestamp = Union[str, datetime, None]


class LookupRow(TypedDict):
    id: str
    short_id: NotRequired[str]
    name: str
    created_at: Timestamp
    updated_at: Timestamp


class RaceRankingRow(LookupRow):
    description: Optional[str]


class RankingPointRow(TypedDict):
    id: str
    short_id: NotRequired[str]
    race_ranking_id: str
    place: int
    points: int
    created_at: Timestamp
    updated_at: Timestamp


class EventRow(TypedDict):
    id: str
    short_id: NotRequired[str]
    name: str
    description: Optional[str]
    date_time: Timestamp
    year: int
    city: Optional[str]
    state: str
    country: str
    event_status: str
    is_public_visible: bool
    organization_id: Optional[str]
    created_by: Optional[str]
    created_at: Timestamp
    updated_at: Timestamp


class EventWithRacesRow(EventRow):
    races: NotRequired[Optional[List["RaceRow"]]]
    supported_categories: NotRequired[Optional[List[LookupRow]]]
    supported_genders: NotRequired[Optional[List[LookupRow]]]
    supported_lengths: NotRequired[Optional[List[LookupRow]]]


class EventWithRaceCountRow(EventRow):
    race_count: int


class RaceRow(TypedDict):
    id: str
    short_id: NotRequired[str]
    name: Optional[str]
    description: Optional[str]
    date_time: Timestamp
    is_public_visible: bool
    event_id: str
    race_category_id: str
    race_category_gender_id: str
    race_category_length_id: str
    race_ranking_id: str
    created_at: Timestamp
    updated_at: Timestamp


class UserRow(TypedDict):
    id: str
    short_id: NotRequired[str]
    first_name: str
    last_name: Optional[str]
    email: Optional[str]
    display_name: Optional[str]
    auth_user_id: NotRequired[Optional[str]]
    role_id: NotRequired[str]
    created_at: Timestamp
    updated_at: Timestamp


class CyclistRow(TypedDict):
    id: str
    short_id: NotRequired[str]
    user_id: str
    born_year: Optional[int]
    gender_id: Optional[str]
    created_at: Timestamp
    updated_at: Timestamp
    user: NotRequired[UserRow]
    gender: NotRequired[Optional[LookupRow]]


class RaceResultRow(TypedDict):
    id: str
    short_id: NotRequired[str]
    race_id: str
    cyclist_id: str
    place: int
    time: Optional[str]
    points: NotRequired[Optional[int]]
    ranking_point_id: Optional[str]
    created_at: Timestamp
    updated_at: Timestamp
    ranking_point: NotRequired[Optional[RankingPointRow]]


class RaceDetailResultRow(RaceResultRow):
    """Race-centric result: embeds the cyclist and its user."""

    cyclist: CyclistRow


class NestedRaceRow(RaceRow):
    event: EventRow
    race_category: LookupRow
    race_category_gender: LookupRow
    race_category_length: LookupRow
    race_ranking: RaceRankingRow


class CyclistRaceResultRow(RaceResultRow):
    """Cyclist-centric result: embeds the race with its event and categories."""

    race: NestedRaceRow


class RaceWithResultsRow(RaceRow):
    race_results: NotRequired[Optional[List[RaceDetailResultRow]]]


class CyclistWithResultsRow(TypedDict):
    user: UserRow
    cyclist: CyclistRow
    gender: Optional[LookupRow]
    race_results: NotRequired[Optional[List[CyclistRaceResultRow]]]


class OrganizationRow(TypedDict):
    id: str
    short_id: NotRequired[str]
    name: str
    description: Optional[str]
    state: str
    created_at: Timestamp
    updated_at: Timestamp
    event_count: NotRequired[Optional[int]]


class OrganizationInvitationRow(TypedDict):
    id: str
    short_id: NotRequired[str]
    organization_id: str
    email: str
    invited_owner_name: str
    retry_count: int
    last_invitation_sent_at: Timestamp
    status: str
    created_at: Timestamp
    updated_at: Timestamp


class AuthUserRow(TypedDict):
    """Flat session shape: one row per authenticated identity.

    ``organization_id`` is the organization's public key.
    """

    id: str
    short_id: NotRequired[str]
    first_name: str
    last_name: Optional[str]
    email: Optional[str]
    display_name: Optional[str]
    created_at: Timestamp
    updated_at: Timestamp
    role_name: str
    cyclist_id: Optional[str]
    cyclist_born_year: Optional[int]
    cyclist_gender_name: Optional[str]
    organizer_id: Optional[str]
    organization_id: Optional[str]


class OrganizerRelationRow(TypedDict):
    id: str
    short_id: NotRequired[str]
    organization_id: str
    organization: NotRequired[Optional[OrganizationRow]]


class UserWithRoleRow(UserRow):
    role: LookupRow


class OrganizationMemberRow(TypedDict):
    """An organizer link with its user (and role) and organization embedded."""

    id: str
    short_id: NotRequired[str]
    user_id: str
    organization_id: str
    created_at: Timestamp
    updated_at: Timestamp
    user: UserWithRoleRow
    organization: NotRequired[Optional[OrganizationRow]]


class UserWithRelationsRow(UserRow):
    """Nested relations shape: the user with role, cyclist and organizer embedded."""

    role: LookupRow
    cyclist: Optional[CyclistRow]
    organizer: Optional[OrganizerRelationRow]


class SetupCompletionRow(TypedDict):
    success: bool
    organization_id: Optional[str]
    user_id: Optional[str]

"""Core domain records for the cycling results layer.

Records are plain dataclasses built by the adapters in
``cycling_results.adapters.mapping``. Every record's ``id`` is the public
key of the row it came from, never the internal key.
"""

from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from .enums import (
    EventStatus,
    InvitationStatus,
    OrganizationState,
    RoleType,
)


def _camel_case(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.capitalize() for part in tail)


def _payload_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        return value.to_dict()
    if isinstance(value, list):
        return [_payload_value(item) for item in value]
    return value


class PayloadMixin:
    """Renders a record as a camelCase payload for rendering callers."""

    # Fields dropped from the payload (instead of emitted as null) when unset
    _omit_when_none: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        for record_field in fields(self):
            value = getattr(self, record_field.name)
            if value is None and record_field.name in self._omit_when_none:
                continue
            payload[_camel_case(record_field.name)] = _payload_value(value)
        return payload


# Lookup tables


@dataclass
class LookupRecord(PayloadMixin):
    """A row of one of the small, fixed lookup tables."""

    id: str
    name: str
    created_at: str
    updated_at: str


@dataclass
class RaceCategory(LookupRecord):
    """Age/experience category, e.g. ELITE or MASTER_30."""


@dataclass
class RaceCategoryGender(LookupRecord):
    """Gender category of a race: FEMALE, MALE or OPEN."""


@dataclass
class RaceCategoryLength(LookupRecord):
    """Distance category of a race: LONG, SHORT, SPRINT or UNIQUE."""


@dataclass
class CyclistGender(LookupRecord):
    """Gender of a cyclist."""


@dataclass
class Role(LookupRecord):
    """Role defining a user's permissions."""


@dataclass
class RaceRanking(PayloadMixin):
    """Ranking system a race scores points in."""

    id: str
    name: str
    description: Optional[str]
    created_at: str
    updated_at: str


@dataclass
class RankingPoint(PayloadMixin):
    """Points awarded for a place in a ranking system."""

    id: str
    place: int
    points: int
    race_ranking_id: str
    created_at: str
    updated_at: str


# Events and races


@dataclass
class Event(PayloadMixin):
    """A cycling event published by an organization."""

    id: str
    name: str
    description: Optional[str]
    date_time: Optional[str]
    year: int
    city: Optional[str]
    state: str
    country: str
    status: EventStatus
    is_public_visible: bool
    organization_id: Optional[str]
    created_by: Optional[str]
    created_at: str
    updated_at: str

    @property
    def is_past(self) -> bool:
        return self.status.is_past

    @property
    def is_upcoming(self) -> bool:
        return self.status.is_upcoming


@dataclass
class Race(PayloadMixin):
    """A single race of an event.

    Foreign keys are the internal keys of the referenced rows.
    """

    id: str
    name: Optional[str]
    description: Optional[str]
    date_time: Optional[str]
    is_public_visible: bool
    event_id: str
    race_category_id: str
    race_category_gender_id: str
    race_category_length_id: str
    race_ranking_id: str
    created_at: str
    updated_at: str


@dataclass
class EventWithRaces(Event):
    """Event with its races and the race configurations it supports."""

    races: List[Race] = field(default_factory=list)
    supported_categories: List[RaceCategory] = field(default_factory=list)
    supported_genders: List[RaceCategoryGender] = field(default_factory=list)
    supported_lengths: List[RaceCategoryLength] = field(default_factory=list)


@dataclass
class EventWithRaceCount(Event):
    """Event row of an organization's event list."""

    race_count: int = 0


# Results


@dataclass
class RaceDetailResult(PayloadMixin):
    """One line of a race's results table (race-centric flattening)."""

    _omit_when_none = ("ranking_point",)

    id: str
    place: int
    time: Optional[str]
    points: Optional[int]
    cyclist_id: str
    cyclist_first_name: str
    cyclist_last_name: str
    created_at: str
    updated_at: str
    ranking_point: Optional[RankingPoint] = None


@dataclass
class RaceWithResults(Race):
    """A race together with its results, ascending by place."""

    race_results: List[RaceDetailResult] = field(default_factory=list)


@dataclass
class RaceResult(PayloadMixin):
    """One result of a cyclist's history (cyclist-centric flattening).

    Carries the event, race and category data inline so a profile page can
    render it without further lookups.
    """

    _omit_when_none = ("ranking_point",)

    id: str
    place: int
    time: Optional[str]
    points: Optional[int]

    event_id: str
    event_name: str
    event_date_time: Optional[str]
    event_year: int
    event_city: Optional[str]
    event_state: str
    event_country: str
    event_status: EventStatus

    race_id: str
    race_name: Optional[str]
    race_date_time: Optional[str]

    race_category_id: str
    race_category_gender_id: str
    race_category_length_id: str
    race_category_type: str
    race_category_gender_type: str
    race_category_length_type: str
    race_ranking_type: str

    created_at: str
    updated_at: str
    ranking_point: Optional[RankingPoint] = None


# Organizations


@dataclass
class Organization(PayloadMixin):
    """Company or club that organizes cycling events."""

    _omit_when_none = ("event_count",)

    id: str
    name: str
    description: Optional[str]
    state: OrganizationState
    created_at: str
    updated_at: str
    event_count: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.state == OrganizationState.ACTIVE


@dataclass
class OrganizationInvitation(PayloadMixin):
    """Pending owner invitation for an organization."""

    id: str
    organization_id: str
    email: str
    invited_owner_name: str
    retry_count: int
    last_invitation_sent_at: Optional[str]
    status: InvitationStatus
    created_at: str
    updated_at: str


@dataclass
class SetupCompletion(PayloadMixin):
    """Outcome of the atomic organizer owner setup procedure."""

    success: bool
    organization_id: Optional[str]
    user_id: Optional[str]


# Authenticated users. Three disjoint shapes tagged by role_type.


@dataclass
class Admin(PayloadMixin):
    """System administrator."""

    id: str
    first_name: str
    last_name: str
    email: str
    display_name: Optional[str]
    created_at: str
    updated_at: str
    has_auth: bool = True
    role_type: RoleType = RoleType.ADMIN


@dataclass
class Organizer(PayloadMixin):
    """Member of an organization, either its owner or staff."""

    id: str
    first_name: str
    last_name: str
    email: str
    display_name: Optional[str]
    role_type: RoleType
    organization_id: str
    created_at: str
    updated_at: str
    has_auth: bool = True

    @property
    def is_owner(self) -> bool:
        return self.role_type == RoleType.ORGANIZER_OWNER


@dataclass
class Cyclist(PayloadMixin):
    """Athlete profile.

    A cyclist may exist without ever having signed in (results entered by
    an organizer), in which case ``has_auth`` is False and ``email`` is None.
    """

    id: str
    first_name: str
    last_name: str
    email: Optional[str]
    display_name: Optional[str]
    has_auth: bool
    gender_name: Optional[str]
    born_year: Optional[int]
    created_at: str
    updated_at: str
    role_type: RoleType = RoleType.CYCLIST


User = Union[Admin, Organizer, Cyclist]


@dataclass
class CyclistWithResults(PayloadMixin):
    """Cyclist profile with the full race history."""

    cyclist: Cyclist
    race_results: List[RaceResult] = field(default_factory=list)

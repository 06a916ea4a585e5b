"""Row adapters: raw store rows to domain records and back."""

from .categories import (
    adapt_cyclist_gender,
    adapt_race_category,
    adapt_race_category_gender,
    adapt_race_category_length,
    adapt_race_ranking,
    adapt_role,
)
from .common import adapt_array, map_timestamps, public_id, to_iso
from .cyclists import adapt_cyclist, adapt_cyclist_with_results
from .events import (
    adapt_event,
    adapt_event_with_race_count,
    adapt_event_with_races,
    event_updates_to_row,
)
from .organizations import (
    adapt_organization,
    adapt_organization_invitation,
    organization_updates_to_row,
)
from .race_results import (
    adapt_race_detail_result,
    adapt_race_result,
    flatten_cyclist_results,
    flatten_race_results,
)
from .races import adapt_race, adapt_race_with_results
from .ranking_points import adapt_optional_ranking_point, adapt_ranking_point
from .users import build_organization_member, build_user, build_user_from_relations

__all__ = [
    "adapt_array",
    "adapt_cyclist",
    "adapt_cyclist_gender",
    "adapt_cyclist_with_results",
    "adapt_event",
    "adapt_event_with_race_count",
    "adapt_event_with_races",
    "adapt_optional_ranking_point",
    "adapt_organization",
    "adapt_organization_invitation",
    "adapt_race",
    "adapt_race_category",
    "adapt_race_category_gender",
    "adapt_race_category_length",
    "adapt_race_detail_result",
    "adapt_race_ranking",
    "adapt_race_result",
    "adapt_race_with_results",
    "adapt_ranking_point",
    "adapt_role",
    "build_organization_member",
    "build_user",
    "build_user_from_relations",
    "event_updates_to_row",
    "flatten_cyclist_results",
    "flatten_race_results",
    "map_timestamps",
    "organization_updates_to_row",
    "public_id",
    "to_iso",
]

"""Role-discriminated user builder.

Two row shapes describe an authenticated user:

* the flat session shape, one joined row with ``role_name`` and the
  ``cyclist_*``/``organizer_id``/``organization_id`` columns filled in for
  the user's role;
* the nested relations shape, with ``role``, ``cyclist`` and ``organizer``
  (carrying its ``organization``) embedded.

Both normalize to one of Admin, Organizer or Cyclist, selected by the role
name alone. Organization membership rows (an organizer link embedding its
user and role) normalize to Organizer and reject every other role.
"""

from typing import Any, Dict, Mapping, cast

import structlog

from ...core.entities import Admin, Cyclist, Organizer, User
from ...core.enums import RoleType
from ...core.errors import InvalidUserRecordError
from ..database.rows import AuthUserRow, OrganizationMemberRow, UserWithRelationsRow
from .common import map_timestamps, public_id

logger = structlog.get_logger()

_USER_COLUMNS = (
    "id",
    "short_id",
    "first_name",
    "last_name",
    "email",
    "display_name",
    "created_at",
    "updated_at",
)


def _invalid(message: str, row: Mapping[str, Any]) -> InvalidUserRecordError:
    logger.error(message, user_id=row.get("short_id") or row.get("id"), role_name=row.get("role_name"))
    return InvalidUserRecordError(message)


def _build_admin(row: AuthUserRow) -> Admin:
    created_at, updated_at = map_timestamps(row)
    return Admin(
        id=public_id(row),
        first_name=row["first_name"],
        last_name=row.get("last_name") or "",
        email=row.get("email") or "",
        display_name=row.get("display_name"),
        created_at=created_at,
        updated_at=updated_at,
    )


def _build_organizer(row: AuthUserRow, role_type: RoleType) -> Organizer:
    if not row.get("organizer_id") or not row.get("organization_id"):
        raise _invalid("Organizer user without organizer or organization", row)

    created_at, updated_at = map_timestamps(row)
    return Organizer(
        id=public_id(row),
        first_name=row["first_name"],
        last_name=row.get("last_name") or "",
        email=row.get("email") or "",
        display_name=row.get("display_name"),
        role_type=role_type,
        organization_id=row["organization_id"],
        created_at=created_at,
        updated_at=updated_at,
    )


def _build_cyclist(row: AuthUserRow) -> Cyclist:
    if not row.get("cyclist_id"):
        raise _invalid("Cyclist user without cyclist profile", row)

    created_at, updated_at = map_timestamps(row)
    email = row.get("email")
    return Cyclist(
        id=public_id(row),
        first_name=row["first_name"],
        last_name=row.get("last_name") or "",
        email=email,
        display_name=row.get("display_name"),
        has_auth=email is not None,
        gender_name=row.get("cyclist_gender_name"),
        born_year=row.get("cyclist_born_year"),
        created_at=created_at,
        updated_at=updated_at,
    )


def build_user(row: AuthUserRow) -> User:
    """Build the user record for a session-shape row.

    Raises:
        InvalidUserRecordError: the role is unknown or not an authenticated
            role, or the row lacks the fields its role requires
    """
    role_type = RoleType.from_string(row.get("role_name"))

    if role_type == RoleType.ADMIN:
        return _build_admin(row)
    if role_type is not None and role_type.is_organizer:
        return _build_organizer(row, role_type)
    if role_type == RoleType.CYCLIST:
        return _build_cyclist(row)

    raise _invalid(f"Unsupported user role: {row.get('role_name')!r}", row)


def _relations_to_session_shape(row: UserWithRelationsRow) -> AuthUserRow:
    role = row.get("role") or {}
    cyclist = row.get("cyclist")
    organizer = row.get("organizer")
    gender = cyclist.get("gender") if cyclist else None
    organization = organizer.get("organization") if organizer else None

    session_row: Dict[str, Any] = {column: row.get(column) for column in _USER_COLUMNS if column in row}
    session_row.update(
        role_name=role.get("name"),
        cyclist_id=public_id(cyclist) if cyclist else None,
        cyclist_born_year=cyclist.get("born_year") if cyclist else None,
        cyclist_gender_name=gender["name"] if gender else None,
        organizer_id=public_id(organizer) if organizer else None,
        organization_id=public_id(organization) if organization else None,
    )
    return cast(AuthUserRow, session_row)


def build_user_from_relations(row: UserWithRelationsRow) -> User:
    """Build the user record for a relations-shape row.

    Raises:
        InvalidUserRecordError: as for :func:`build_user`
    """
    return build_user(_relations_to_session_shape(row))


def build_organization_member(row: OrganizationMemberRow) -> Organizer:
    """Build the organizer record of one organization membership row.

    The row is an organizer link with its user (and the user's role) and its
    organization embedded. Members always carry an organizer role.

    Raises:
        InvalidUserRecordError: the user's role is not an organizer role
    """
    user = row["user"]
    organization = row.get("organization")
    role = user.get("role") or {}

    session_row: Dict[str, Any] = {column: user.get(column) for column in _USER_COLUMNS if column in user}
    session_row.update(
        role_name=role.get("name"),
        organizer_id=public_id(row),
        organization_id=public_id(organization) if organization else None,
    )

    role_type = RoleType.from_string(session_row["role_name"])
    if role_type is None or not role_type.is_organizer:
        raise _invalid(f"Organization member with non-organizer role: {session_row['role_name']!r}", session_row)

    return _build_organizer(cast(AuthUserRow, session_row), role_type)

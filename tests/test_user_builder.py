"""Tests for the role-discriminated user builder."""

import pytest

from cycling_results.adapters.mapping import (
    build_organization_member,
    build_user,
    build_user_from_relations,
)
from cycling_results.core.entities import Admin, Cyclist, Organizer
from cycling_results.core.enums import RoleType
from cycling_results.core.errors import InvalidUserRecordError

from factories import RowFactory


class TestBuildUser:
    """Test cases for build_user on session-shape rows."""

    def test_admin(self):
        user = build_user(RowFactory.auth_user("ADMIN"))

        assert isinstance(user, Admin)
        assert user.id == "usr-1"
        assert user.role_type == RoleType.ADMIN
        assert user.has_auth is True

    @pytest.mark.parametrize("role_name", ["ORGANIZER_OWNER", "ORGANIZER_STAFF"])
    def test_organizer(self, role_name):
        user = build_user(
            RowFactory.auth_user(role_name, organizer_id="orgz-1", organization_id="org-pedal")
        )

        assert isinstance(user, Organizer)
        assert user.role_type == RoleType(role_name)
        assert user.organization_id == "org-pedal"
        assert user.has_auth is True
        assert user.is_owner == (role_name == "ORGANIZER_OWNER")

    @pytest.mark.parametrize(
        "overrides",
        [
            {"organizer_id": None, "organization_id": "org-pedal"},
            {"organizer_id": "orgz-1", "organization_id": None},
        ],
    )
    def test_organizer_without_organization_fields(self, overrides):
        with pytest.raises(InvalidUserRecordError):
            build_user(RowFactory.auth_user("ORGANIZER_OWNER", **overrides))

    def test_cyclist(self):
        user = build_user(
            RowFactory.auth_user(
                "CYCLIST", cyclist_id="cyc-1", cyclist_born_year=1990, cyclist_gender_name="F"
            )
        )

        assert isinstance(user, Cyclist)
        assert user.role_type == RoleType.CYCLIST
        assert user.born_year == 1990
        assert user.gender_name == "F"
        assert user.has_auth is True

    def test_cyclist_without_email_has_no_auth(self):
        user = build_user(RowFactory.auth_user("CYCLIST", cyclist_id="cyc-1", email=None))

        assert user.has_auth is False

    def test_cyclist_without_profile(self):
        with pytest.raises(InvalidUserRecordError):
            build_user(RowFactory.auth_user("CYCLIST"))

    @pytest.mark.parametrize("role_name", ["PUBLIC", "SUPERUSER", None])
    def test_unsupported_role(self, role_name):
        with pytest.raises(InvalidUserRecordError):
            build_user(RowFactory.auth_user(role_name))

    def test_invalid_record_is_a_value_error(self):
        with pytest.raises(ValueError):
            build_user(RowFactory.auth_user("PUBLIC"))

    def test_payload_carries_role_tag(self):
        payload = build_user(RowFactory.auth_user("ADMIN")).to_dict()

        assert payload["roleType"] == "ADMIN"
        assert payload["firstName"] == "Marta"
        assert payload["displayName"] == "Marta R."


class TestBuildUserFromRelations:
    """Test cases for build_user_from_relations on nested rows."""

    def test_admin(self):
        user = build_user_from_relations(RowFactory.user_with_relations("ADMIN"))

        assert isinstance(user, Admin)
        assert user.id == "usr-1"

    def test_organizer_projects_organization_public_id(self):
        organizer = {
            "id": "uuid-orgz-1",
            "short_id": "orgz-1",
            "organization_id": "uuid-org-pedal",
            "organization": RowFactory.organization(),
        }

        user = build_user_from_relations(
            RowFactory.user_with_relations("ORGANIZER_STAFF", organizer=organizer)
        )

        assert isinstance(user, Organizer)
        assert user.organization_id == "org-pedal"
        assert user.role_type == RoleType.ORGANIZER_STAFF

    def test_organizer_without_organization(self):
        organizer = {"id": "uuid-orgz-1", "short_id": "orgz-1", "organization_id": "uuid-org-pedal"}

        with pytest.raises(InvalidUserRecordError):
            build_user_from_relations(RowFactory.user_with_relations("ORGANIZER_OWNER", organizer=organizer))

    def test_cyclist(self):
        cyclist = {
            "id": "uuid-cyc-1",
            "short_id": "cyc-1",
            "user_id": "uuid-usr-1",
            "born_year": 1985,
            "gender_id": "uuid-cg-m",
            "created_at": None,
            "updated_at": None,
            "gender": RowFactory.lookup("M", "cg-m", "uuid-cg-m"),
        }

        user = build_user_from_relations(RowFactory.user_with_relations("CYCLIST", cyclist=cyclist))

        assert isinstance(user, Cyclist)
        assert user.born_year == 1985
        assert user.gender_name == "M"

    def test_cyclist_role_without_profile(self):
        with pytest.raises(InvalidUserRecordError):
            build_user_from_relations(RowFactory.user_with_relations("CYCLIST"))

    def test_same_record_as_session_shape(self):
        session_row = RowFactory.auth_user("ADMIN", first_name="Ada", display_name=None)
        relations_row = RowFactory.user_with_relations("ADMIN", first_name="Ada")

        assert build_user(session_row) == build_user_from_relations(relations_row)


class TestBuildOrganizationMember:
    """Test cases for build_organization_member on membership rows."""

    @pytest.mark.parametrize("role_name", ["ORGANIZER_OWNER", "ORGANIZER_STAFF"])
    def test_member(self, role_name):
        member = build_organization_member(RowFactory.organization_member(role_name))

        assert isinstance(member, Organizer)
        assert member.id == "usr-sam"
        assert member.role_type == RoleType(role_name)
        assert member.organization_id == "org-pedal"
        assert member.last_name == "Staff"

    @pytest.mark.parametrize("role_name", ["ADMIN", "CYCLIST", "PUBLIC", "JUDGE"])
    def test_non_organizer_role_is_rejected(self, role_name):
        with pytest.raises(InvalidUserRecordError, match="non-organizer role"):
            build_organization_member(RowFactory.organization_member(role_name))

    def test_member_without_organization(self):
        with pytest.raises(InvalidUserRecordError):
            build_organization_member(RowFactory.organization_member(organization=None))

    def test_matches_session_shape(self):
        member = build_organization_member(RowFactory.organization_member("ORGANIZER_OWNER"))
        session_user = build_user(
            RowFactory.auth_user(
                "ORGANIZER_OWNER",
                id="uuid-usr-sam",
                short_id="usr-sam",
                first_name="Sam",
                last_name="Staff",
                email="sam@example.com",
                display_name=None,
                organizer_id="orgz-usr-sam",
                organization_id="org-pedal",
                created_at="2024-03-01T10:00:00+00:00",
                updated_at="2024-03-01T10:00:00+00:00",
            )
        )

        assert member == session_user

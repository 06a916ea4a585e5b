"""Test data factories for raw rows and seeded stores."""
from datetime import datetime
from typing import Any, Dict, Optional

from cycling_results.adapters.database.models import (
    Cyclist,
    CyclistGender,
    Event,
    Organization,
    OrganizationInvitation,
    Organizer,
    Race,
    RaceCategory,
    RaceCategoryGender,
    RaceCategoryLength,
    RaceRanking,
    RaceResult,
    RankingPoint,
    Role,
    User,
)

TIMESTAMP = "2024-03-01T10:00:00+00:00"


class RowFactory:
    """Factories for the raw dict rows the store hands to the adapters."""

    @staticmethod
    def lookup(name: str = "ELITE", short_id: str = "cat-elite", id: str = "uuid-cat-elite") -> Dict[str, Any]:
        return {
            "id": id,
            "short_id": short_id,
            "name": name,
            "created_at": TIMESTAMP,
            "updated_at": TIMESTAMP,
        }

    @staticmethod
    def ranking_point(place: int = 1, points: int = 100, short_id: Optional[str] = None) -> Dict[str, Any]:
        return {
            "id": f"uuid-rp-{place}",
            "short_id": short_id or f"rp-{place}",
            "race_ranking_id": "uuid-ranking-uci",
            "place": place,
            "points": points,
            "created_at": TIMESTAMP,
            "updated_at": TIMESTAMP,
        }

    @staticmethod
    def user(
        short_id: str = "usr-anna",
        first_name: str = "Anna",
        last_name: Optional[str] = "Lopez",
        email: Optional[str] = "anna@example.com",
    ) -> Dict[str, Any]:
        return {
            "id": f"uuid-{short_id}",
            "short_id": short_id,
            "first_name": first_name,
            "last_name": last_name,
            "email": email,
            "display_name": None,
            "auth_user_id": None,
            "role_id": "uuid-role-cyclist",
            "created_at": TIMESTAMP,
            "updated_at": TIMESTAMP,
        }

    @staticmethod
    def event(**overrides: Any) -> Dict[str, Any]:
        row = {
            "id": "uuid-evt-spring",
            "short_id": "evt-spring",
            "name": "Spring Classic",
            "description": "Opening race of the season",
            "date_time": datetime(2024, 4, 14, 9, 0),
            "year": 2024,
            "city": "Valencia",
            "state": "Valencia",
            "country": "ES",
            "event_status": "FINISHED",
            "is_public_visible": True,
            "organization_id": "uuid-org-pedal",
            "created_by": "uuid-usr-owner",
            "created_at": TIMESTAMP,
            "updated_at": TIMESTAMP,
        }
        row.update(overrides)
        return row

    @staticmethod
    def race(**overrides: Any) -> Dict[str, Any]:
        row = {
            "id": "uuid-race-elite",
            "short_id": "race-elite",
            "name": "Elite Men Long",
            "description": None,
            "date_time": datetime(2024, 4, 14, 10, 0),
            "is_public_visible": True,
            "event_id": "uuid-evt-spring",
            "race_category_id": "uuid-cat-elite",
            "race_category_gender_id": "uuid-gender-male",
            "race_category_length_id": "uuid-length-long",
            "race_ranking_id": "uuid-ranking-uci",
            "created_at": TIMESTAMP,
            "updated_at": TIMESTAMP,
        }
        row.update(overrides)
        return row

    @staticmethod
    def race_detail_result(
        place: int,
        user: Dict[str, Any],
        ranking_point: Optional[Dict[str, Any]] = None,
        points: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Race-centric result row embedding cyclist and user."""
        return {
            "id": f"uuid-res-{place}",
            "short_id": f"res-{place}",
            "race_id": "uuid-race-elite",
            "cyclist_id": f"uuid-cyc-{user['short_id']}",
            "place": place,
            "time": f"02:1{place}:00",
            "points": points,
            "ranking_point_id": ranking_point["id"] if ranking_point else None,
            "created_at": TIMESTAMP,
            "updated_at": TIMESTAMP,
            "cyclist": {
                "id": f"uuid-cyc-{user['short_id']}",
                "short_id": f"cyc-{place}",
                "user_id": user["id"],
                "born_year": 1990,
                "gender_id": None,
                "created_at": TIMESTAMP,
                "updated_at": TIMESTAMP,
                "user": user,
            },
            "ranking_point": ranking_point,
        }

    @staticmethod
    def cyclist_race_result(
        place: int,
        event: Optional[Dict[str, Any]] = None,
        ranking_point: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Cyclist-centric result row embedding race, event and categories."""
        race = RowFactory.race()
        race.update(
            event=event or RowFactory.event(),
            race_category=RowFactory.lookup("ELITE", "cat-elite", "uuid-cat-elite"),
            race_category_gender=RowFactory.lookup("MALE", "gen-male", "uuid-gender-male"),
            race_category_length=RowFactory.lookup("LONG", "len-long", "uuid-length-long"),
            race_ranking={**RowFactory.lookup("UCI", "rank-uci", "uuid-ranking-uci"), "description": None},
        )
        return {
            "id": f"uuid-res-{place}",
            "short_id": f"res-{place}",
            "race_id": race["id"],
            "cyclist_id": "uuid-cyc-anna",
            "place": place,
            "time": None,
            "ranking_point_id": ranking_point["id"] if ranking_point else None,
            "created_at": TIMESTAMP,
            "updated_at": TIMESTAMP,
            "race": race,
            "ranking_point": ranking_point,
        }

    @staticmethod
    def auth_user(role_name: str, **overrides: Any) -> Dict[str, Any]:
        """Flat session-shape row."""
        row = {
            "id": "uuid-usr-1",
            "short_id": "usr-1",
            "first_name": "Marta",
            "last_name": "Ruiz",
            "email": "marta@example.com",
            "display_name": "Marta R.",
            "created_at": TIMESTAMP,
            "updated_at": TIMESTAMP,
            "role_name": role_name,
            "cyclist_id": None,
            "cyclist_born_year": None,
            "cyclist_gender_name": None,
            "organizer_id": None,
            "organization_id": None,
        }
        row.update(overrides)
        return row

    @staticmethod
    def user_with_relations(
        role_name: str,
        cyclist: Optional[Dict[str, Any]] = None,
        organizer: Optional[Dict[str, Any]] = None,
        **overrides: Any,
    ) -> Dict[str, Any]:
        """Nested relations-shape row."""
        row = RowFactory.user(short_id="usr-1", first_name="Marta", last_name="Ruiz", email="marta@example.com")
        row.update(
            role=RowFactory.lookup(role_name, f"role-{role_name.lower()}", f"uuid-role-{role_name.lower()}"),
            cyclist=cyclist,
            organizer=organizer,
        )
        row.update(overrides)
        return row

    @staticmethod
    def organization_member(role_name: str = "ORGANIZER_STAFF", short_id: str = "usr-sam", **overrides: Any) -> Dict[str, Any]:
        """Organizer link embedding its user (with role) and organization."""
        user = RowFactory.user(short_id=short_id, first_name="Sam", last_name="Staff", email="sam@example.com")
        user["role"] = RowFactory.lookup(role_name, f"role-{role_name.lower()}", f"uuid-role-{role_name.lower()}")
        row = {
            "id": f"uuid-orgz-{short_id}",
            "short_id": f"orgz-{short_id}",
            "user_id": user["id"],
            "organization_id": "uuid-org-pedal",
            "created_at": TIMESTAMP,
            "updated_at": TIMESTAMP,
            "user": user,
            "organization": RowFactory.organization(),
        }
        row.update(overrides)
        return row

    @staticmethod
    def organization(**overrides: Any) -> Dict[str, Any]:
        row = {
            "id": "uuid-org-pedal",
            "short_id": "org-pedal",
            "name": "Pedal Club",
            "description": "Road cycling club",
            "state": "ACTIVE",
            "created_at": TIMESTAMP,
            "updated_at": TIMESTAMP,
        }
        row.update(overrides)
        return row

    @staticmethod
    def invitation(**overrides: Any) -> Dict[str, Any]:
        row = {
            "id": "uuid-inv-1",
            "short_id": "inv-1",
            "organization_id": "uuid-org-pedal",
            "email": "owner@example.com",
            "invited_owner_name": "Olga Owner",
            "retry_count": 1,
            "last_invitation_sent_at": datetime(2024, 2, 1, 8, 30),
            "status": "pending",
            "created_at": TIMESTAMP,
            "updated_at": TIMESTAMP,
        }
        row.update(overrides)
        return row


class StoreSeeder:
    """Seeds a store with one organization, three events and their results.

    Public keys are fixed so tests can address rows directly:

    * ``evt-spring`` (FINISHED, April 2024) holds race ``race-elite``
      (ELITE/MALE/LONG, UCI) with results for Anna (1st, 100 points), Bruno
      (2nd, 50 points) and Carla (3rd, no ranking point, no email);
    * ``evt-autumn`` (FINISHED, September 2024) holds ``race-m30``
      (MASTER_30/MALE/LONG) where Anna finished 2nd;
    * ``evt-future`` (AVAILABLE, 2099) holds no races.

    ``org-pedal`` has two members: owner Olga (``usr-owner``) and staff member
    Sam (``usr-staff``), who joined later.
    """

    @staticmethod
    async def seed(session) -> None:
        roles = {name: Role(short_id=f"role-{i}", name=name) for i, name in enumerate(
            ["ADMIN", "ORGANIZER_OWNER", "ORGANIZER_STAFF", "CYCLIST", "PUBLIC"]
        )}
        female = CyclistGender(short_id="cg-f", name="F")
        male = CyclistGender(short_id="cg-m", name="M")

        elite = RaceCategory(short_id="cat-elite", name="ELITE")
        master = RaceCategory(short_id="cat-m30", name="MASTER_30")
        men = RaceCategoryGender(short_id="gen-male", name="MALE")
        women = RaceCategoryGender(short_id="gen-female", name="FEMALE")
        long_length = RaceCategoryLength(short_id="len-long", name="LONG")
        short_length = RaceCategoryLength(short_id="len-short", name="SHORT")

        uci = RaceRanking(short_id="rank-uci", name="UCI", description="International ranking")
        first = RankingPoint(short_id="rp-1", place=1, points=100)
        second = RankingPoint(short_id="rp-2", place=2, points=50)

        organization = Organization(short_id="org-pedal", name="Pedal Club", state="ACTIVE")
        empty_organization = Organization(short_id="org-empty", name="Alpine Riders", state="WAITING_OWNER")

        admin = User(short_id="usr-admin", first_name="Ada", last_name="Admin",
                     email="admin@example.com", auth_user_id="auth-admin", role=roles["ADMIN"])
        owner = User(short_id="usr-owner", first_name="Olga", last_name="Owner",
                     email="owner@example.com", auth_user_id="auth-owner", role=roles["ORGANIZER_OWNER"])
        anna = User(short_id="usr-anna", first_name="Anna", last_name="Lopez",
                    email="anna@example.com", auth_user_id="auth-anna", role=roles["CYCLIST"])
        bruno = User(short_id="usr-bruno", first_name="Bruno", last_name="Diaz",
                     email="bruno@example.com", role=roles["CYCLIST"])
        carla = User(short_id="usr-carla", first_name="Carla", last_name="Vega", role=roles["CYCLIST"])
        staff = User(short_id="usr-staff", first_name="Sam", last_name="Staff",
                     email="staff@example.com", auth_user_id="auth-staff", role=roles["ORGANIZER_STAFF"])

        session.add_all([
            *roles.values(), female, male, elite, master, men, women, long_length, short_length,
            uci, organization, empty_organization, admin, owner, staff, anna, bruno, carla,
        ])
        await session.flush()

        first.race_ranking_id = uci.id
        second.race_ranking_id = uci.id

        anna_profile = Cyclist(short_id="cyc-anna", user=anna, born_year=1992, gender=female)
        bruno_profile = Cyclist(short_id="cyc-bruno", user=bruno, born_year=1988, gender=male)
        carla_profile = Cyclist(short_id="cyc-carla", user=carla, born_year=1995, gender=female)
        session.add_all([
            first, second, anna_profile, bruno_profile, carla_profile,
            Organizer(short_id="orgz-olga", user=owner, organization=organization,
                      created_at=datetime(2024, 1, 5, 12, 0)),
            Organizer(short_id="orgz-sam", user=staff, organization=organization,
                      created_at=datetime(2024, 2, 9, 12, 0)),
            OrganizationInvitation(
                short_id="inv-1",
                organization_id=organization.id,
                email="owner@example.com",
                invited_owner_name="Olga Owner",
                retry_count=0,
                status="accepted",
            ),
        ])

        spring = Event(
            short_id="evt-spring", name="Spring Classic", date_time=datetime(2024, 4, 14, 9, 0),
            year=2024, city="Valencia", state="Valencia", country="ES", event_status="FINISHED",
            is_public_visible=True, organization=organization, created_by=owner.id,
        )
        autumn = Event(
            short_id="evt-autumn", name="Autumn Grand Prix", date_time=datetime(2024, 9, 22, 9, 0),
            year=2024, state="Madrid", country="ES", event_status="FINISHED",
            is_public_visible=True, organization=organization,
        )
        future = Event(
            short_id="evt-future", name="Winter Trophy", date_time=datetime(2099, 1, 10, 9, 0),
            year=2099, state="Madrid", country="ES", event_status="AVAILABLE",
            is_public_visible=True, organization=organization,
        )
        spring.supported_categories = [master, elite]
        spring.supported_genders = [men]
        spring.supported_lengths = [long_length]
        session.add_all([spring, autumn, future])
        await session.flush()

        elite_race = Race(
            short_id="race-elite", name="Elite Men Long", date_time=datetime(2024, 4, 14, 10, 0),
            event=spring, race_category=elite, race_category_gender=men,
            race_category_length=long_length, race_ranking=uci, is_public_visible=True,
        )
        master_race = Race(
            short_id="race-m30", name="Master 30 Men Long", date_time=datetime(2024, 9, 22, 10, 0),
            event=autumn, race_category=master, race_category_gender=men,
            race_category_length=long_length, race_ranking=uci, is_public_visible=True,
        )
        session.add_all([elite_race, master_race])
        await session.flush()

        # Inserted out of place order
        session.add_all([
            RaceResult(short_id="res-carla", race=elite_race, cyclist=carla_profile, place=3, time="02:14:40"),
            RaceResult(short_id="res-anna", race=elite_race, cyclist=anna_profile, place=1,
                       time="02:12:05", ranking_point=first),
            RaceResult(short_id="res-bruno", race=elite_race, cyclist=bruno_profile, place=2,
                       time="02:12:30", ranking_point=second),
            RaceResult(short_id="res-anna-2", race=master_race, cyclist=anna_profile, place=2,
                       time="01:58:00", ranking_point=second),
        ])
        await session.commit()

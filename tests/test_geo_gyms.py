"""Tests for distance math and gym lookup."""

import asyncio

import pytest

from gymplan.db import GymRepository, UserRepository
from gymplan.errors import NotFoundError
from gymplan.models.gym import Gym
from gymplan.services.equipment import EquipmentService
from gymplan.services.geo import EARTH_RADIUS_M, haversine_distance
from gymplan.services.gyms import GymService

# Latitude offset of roughly ten meters
TEN_METERS = 10 / 111_195


class TestHaversine:
    """Tests for great-circle distance."""

    def test_same_point(self):
        assert haversine_distance(33.99, -118.47, 33.99, -118.47) == 0

    def test_one_degree_of_latitude(self):
        expected = EARTH_RADIUS_M * 3.141592653589793 / 180
        assert haversine_distance(0, 0, 1, 0) == pytest.approx(expected)

    def test_symmetric(self):
        there = haversine_distance(33.99, -118.47, 34.05, -118.25)
        back = haversine_distance(34.05, -118.25, 33.99, -118.47)
        assert there == pytest.approx(back)
        assert there == pytest.approx(21_300, rel=0.05)

    def test_antipodal_points(self):
        """Test opposite points give half the circumference instead of failing."""
        distance = haversine_distance(45.14, 0.0, -45.14, 180.0)
        assert distance == pytest.approx(EARTH_RADIUS_M * 3.141592653589793)


@pytest.fixture
def two_gyms(empty_db):
    """Gyms ten meters apart."""
    repo = GymRepository(empty_db)
    here = Gym(name="Here Gym", address="1 Main St", latitude=10.0, longitude=20.0)
    near = Gym(name="Near Gym", address="2 Main St", latitude=10.0 + TEN_METERS, longitude=20.0)
    asyncio.run(repo.create(near))
    asyncio.run(repo.create(here))
    return empty_db, here, near


class TestNearbyGyms:
    """Tests for radius search."""

    def test_zero_radius_matches_exact_location(self, two_gyms):
        """Test a zero radius includes a gym at the point and nothing else."""
        db_path, here, _ = two_gyms
        found = asyncio.run(GymService(db_path).nearby(10.0, 20.0, 0))

        assert [g.id for g in found] == [here.id]
        assert found[0].distance == 0

    def test_sorted_by_distance(self, two_gyms):
        db_path, here, near = two_gyms
        found = asyncio.run(GymService(db_path).nearby(10.0, 20.0, 50))

        assert [g.id for g in found] == [here.id, near.id]
        assert found[1].distance == pytest.approx(10, abs=0.1)

    def test_seed_gyms_default_radius(self, seeded_db):
        """Test only the gym within five kilometers is returned."""
        found = asyncio.run(GymService(seeded_db).nearby(33.99, -118.47))
        assert [g.name for g in found] == ["Gold's Gym Venice"]

    def test_antipode_of_a_gym(self, empty_db):
        """Test searching from the far side of the globe just finds nothing nearby."""
        gym = Gym(name="Far Gym", address="1 Rue", latitude=45.14, longitude=0.0)
        asyncio.run(GymRepository(empty_db).create(gym))
        service = GymService(empty_db)

        assert asyncio.run(service.nearby(-45.14, 180.0, 5000)) == []
        found = asyncio.run(service.nearby(-45.14, 180.0, 21_000_000))
        assert [g.id for g in found] == [gym.id]


class TestGymDetails:
    """Tests for gym lookup and selection."""

    def test_get_with_equipment(self, seeded_db, make_user):
        user = make_user(seeded_db)
        gym = asyncio.run(GymRepository(seeded_db).list_all())[0]
        service = EquipmentService(seeded_db)
        barbell = next(e for e in asyncio.run(service.list_catalog()) if e.name == "Barbell")
        asyncio.run(service.add_user_equipment(user.id, [barbell.id], gym_id=gym.id))

        found = asyncio.run(GymService(seeded_db).get(gym.id))

        assert [link.equipment_id for link in found.user_equipment] == [barbell.id]
        assert "userEquipment" in found.to_dict()

    def test_get_missing(self, seeded_db):
        with pytest.raises(NotFoundError, match="Gym not found"):
            asyncio.run(GymService(seeded_db).get("missing"))

    def test_select(self, seeded_db, make_user):
        user = make_user(seeded_db)
        gym = asyncio.run(GymRepository(seeded_db).list_all())[0]

        asyncio.run(GymService(seeded_db).select(user, gym.id))

        stored = asyncio.run(UserRepository(seeded_db).get(user.id))
        assert stored.selected_gym_id == gym.id

    def test_select_missing(self, seeded_db, make_user):
        user = make_user(seeded_db)
        with pytest.raises(NotFoundError):
            asyncio.run(GymService(seeded_db).select(user, "missing"))

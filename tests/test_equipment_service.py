"""Tests for the equipment catalog and user inventory."""

import asyncio

import pytest

from gymplan.db import seed_catalog
from gymplan.errors import NotFoundError, ValidationError
from gymplan.models.equipment import EquipmentCategory
from gymplan.services.equipment import EquipmentService


@pytest.fixture
def catalog(seeded_db):
    """Seeded catalog keyed by equipment name."""
    items = asyncio.run(EquipmentService(seeded_db).list_catalog())
    return {item.name: item for item in items}


class TestCatalog:
    """Tests for catalog seeding and listing."""

    def test_seed_is_idempotent(self, seeded_db, catalog):
        counts = asyncio.run(seed_catalog(seeded_db))

        assert counts == {"gyms": 0, "equipment": 0, "exercises": 0}
        assert len(asyncio.run(EquipmentService(seeded_db).list_catalog())) == len(catalog)

    def test_seeded_names(self, catalog):
        assert {"Barbell", "Dumbbells", "Pull-up Bar"} <= set(catalog)


class TestUserEquipment:
    """Tests for linking equipment to users."""

    def test_add_and_list(self, seeded_db, make_user, catalog):
        user = make_user(seeded_db)
        service = EquipmentService(seeded_db)

        links = asyncio.run(service.add_user_equipment(
            user.id, [catalog["Dumbbells"].id, catalog["Barbell"].id]
        ))

        assert [link.equipment.name for link in links] == ["Barbell", "Dumbbells"]
        assert asyncio.run(service.get_user_equipment(user.id)) == links

    def test_relinking_does_not_duplicate(self, seeded_db, make_user, catalog):
        """Test links are upserted per (user, equipment)."""
        user = make_user(seeded_db)
        service = EquipmentService(seeded_db)
        barbell = catalog["Barbell"].id

        asyncio.run(service.add_user_equipment(user.id, [barbell, barbell]))
        links = asyncio.run(service.add_user_equipment(user.id, [barbell]))

        assert len(links) == 1

    def test_unknown_equipment_rolls_back(self, seeded_db, make_user, catalog):
        """Test one bad id leaves the inventory unchanged."""
        user = make_user(seeded_db)
        service = EquipmentService(seeded_db)

        with pytest.raises(NotFoundError):
            asyncio.run(service.add_user_equipment(
                user.id, [catalog["Barbell"].id, "missing"]
            ))

        assert asyncio.run(service.get_user_equipment(user.id)) == []

    def test_unknown_gym(self, seeded_db, make_user, catalog):
        user = make_user(seeded_db)
        with pytest.raises(NotFoundError, match="Gym not found"):
            asyncio.run(EquipmentService(seeded_db).add_user_equipment(
                user.id, [catalog["Barbell"].id], gym_id="missing"
            ))


class TestConfirmDetected:
    """Tests for turning scan results into catalog rows."""

    def test_reuses_and_creates(self, seeded_db, catalog):
        """Test known names are reused and new ones are added."""
        service = EquipmentService(seeded_db)

        confirmed = asyncio.run(service.confirm_detected([
            {"name": "barbell", "category": "free_weights"},
            {"name": "Sled", "category": "strongman"},
        ]))

        assert confirmed[0].id == catalog["Barbell"].id
        assert confirmed[1].name == "Sled"
        assert confirmed[1].category is EquipmentCategory.OTHER
        assert len(asyncio.run(service.list_catalog())) == len(catalog) + 1

    def test_missing_name(self, seeded_db, catalog):
        service = EquipmentService(seeded_db)
        with pytest.raises(ValidationError):
            asyncio.run(service.confirm_detected([{"name": "Sled"}, {"name": " "}]))

        assert len(asyncio.run(service.list_catalog())) == len(catalog)

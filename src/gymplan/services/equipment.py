"""Equipment catalog and user inventory management."""

import logging
from pathlib import Path

from ..db.engine import transaction
from ..db.repositories import EquipmentRepository, GymRepository, UserEquipmentRepository
from ..errors import NotFoundError, ValidationError
from ..models.equipment import Equipment, EquipmentCategory, UserEquipment

logger = logging.getLogger(__name__)


class EquipmentService:
    """Catalog lookups and per-user equipment links."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.equipment_repo = EquipmentRepository(db_path)
        self.user_equipment_repo = UserEquipmentRepository(db_path)
        self.gym_repo = GymRepository(db_path)

    async def list_catalog(self) -> list[Equipment]:
        return await self.equipment_repo.list_all()

    async def add_user_equipment(
        self, user_id: str, equipment_ids: list[str], gym_id: str | None = None
    ) -> list[UserEquipment]:
        """Link equipment to a user, all or nothing.

        Raises:
            NotFoundError: an equipment id or the gym does not exist; no
                link is written in that case.
        """
        if gym_id is not None and await self.gym_repo.get(gym_id) is None:
            raise NotFoundError("Gym not found")

        async with transaction(self.db_path) as db:
            for equipment_id in dict.fromkeys(equipment_ids):
                if await self.equipment_repo.get(equipment_id, db=db) is None:
                    raise NotFoundError(f"Equipment {equipment_id} not found")
                await self.user_equipment_repo.upsert(user_id, equipment_id, gym_id, db=db)

        logger.info("Linked %d equipment item(s) to user %s", len(equipment_ids), user_id)
        return await self.user_equipment_repo.list_for_user(user_id)

    async def get_user_equipment(self, user_id: str) -> list[UserEquipment]:
        return await self.user_equipment_repo.list_for_user(user_id)

    async def confirm_detected(self, items: list[dict]) -> list[Equipment]:
        """Find or create catalog rows for scanned items the user confirmed.

        Each item needs a `name`; `category` defaults to other.
        """
        confirmed: list[Equipment] = []
        async with transaction(self.db_path) as db:
            for item in items:
                name = (item.get("name") or "").strip()
                if not name:
                    raise ValidationError("Every confirmed item needs a name")

                existing = await self.equipment_repo.get_by_name(name, db=db)
                if existing is None:
                    existing = Equipment(
                        name=name, category=EquipmentCategory.parse(item.get("category"))
                    )
                    await self.equipment_repo.create(existing, db=db)
                    logger.info("Added %s to the equipment catalog", name)
                confirmed.append(existing)
        return confirmed

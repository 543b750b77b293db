from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from splitbook.models.base import to_object_id
from splitbook.models.settlement import Settlement


class SettlementRepository:
    """Repository for settlement records."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db.settlements

    async def list_by_group(self, group_id: str) -> List[Settlement]:
        docs = await self.collection.find(
            {"group_id": to_object_id(group_id)}
        ).to_list(None)
        return [Settlement(**doc) for doc in docs]

    async def list_direct_between(self, user_a: str, user_b: str) -> List[Settlement]:
        """Direct settlements between two users, in either direction."""
        a = to_object_id(user_a)
        b = to_object_id(user_b)
        docs = await self.collection.find({
            "group_id": None,
            "$or": [
                {"paid_by_user_id": a, "received_by_user_id": b},
                {"paid_by_user_id": b, "received_by_user_id": a}
            ]
        }).to_list(None)
        return [Settlement(**doc) for doc in docs]

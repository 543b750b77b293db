from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from splitbook.models.base import to_object_id
from splitbook.models.group import Group


class GroupRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db.groups

    async def get_group_by_id(self, group_id: str) -> Optional[Group]:
        try:
            oid = to_object_id(group_id)
        except ValueError:
            return None

        doc = await self.collection.find_one({"_id": oid})
        return Group(**doc) if doc else None

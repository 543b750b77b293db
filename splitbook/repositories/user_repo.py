from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from splitbook.models.base import to_object_id
from splitbook.models.user import User


class UserRepository:
    """Read access to user documents."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db.users

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        try:
            oid = to_object_id(user_id)
        except ValueError:
            return None

        doc = await self.collection.find_one({"_id": oid})
        return User(**doc) if doc else None

    async def get_users_by_ids(self, user_ids: List[str]) -> List[User]:
        """Fetch users, returned in the order of `user_ids`; unknown ids are dropped."""
        oids = [to_object_id(uid) for uid in user_ids]
        docs = await self.collection.find({"_id": {"$in": oids}}).to_list(None)
        by_id = {u.id: u for u in (User(**doc) for doc in docs)}
        return [by_id[uid] for uid in user_ids if uid in by_id]

"""
ExpenseRepository - Reads and removes expense documents.

Scopes:
- group expenses: group_id == the group
- direct expenses: no group_id, paid by one of the given users
"""

from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from splitbook.models.base import to_object_id
from splitbook.models.expense import Expense


class ExpenseRepository:
    """Repository for expense records."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db.expenses

    async def list_by_group(self, group_id: str) -> List[Expense]:
        docs = await self.collection.find(
            {"group_id": to_object_id(group_id)}
        ).to_list(None)
        return [Expense(**doc) for doc in docs]

    async def list_direct_paid_by(self, user_ids: List[str]) -> List[Expense]:
        """Direct expenses whose payer is any of `user_ids`."""
        docs = await self.collection.find({
            "paid_by_user_id": {"$in": [to_object_id(uid) for uid in user_ids]},
            "group_id": None
        }).to_list(None)
        return [Expense(**doc) for doc in docs]

    async def get_by_id(self, expense_id: str) -> Optional[Expense]:
        try:
            oid = to_object_id(expense_id)
        except ValueError:
            return None

        doc = await self.collection.find_one({"_id": oid})
        return Expense(**doc) if doc else None

    async def delete(self, expense_id: str) -> bool:
        result = await self.collection.delete_one({"_id": to_object_id(expense_id)})
        return result.deleted_count == 1

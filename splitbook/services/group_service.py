import logging

from fastapi import HTTPException

from splitbook.db.session import get_database
from splitbook.models.user import MemberDetails
from splitbook.repositories.expense_repo import ExpenseRepository
from splitbook.repositories.group_repo import GroupRepository
from splitbook.repositories.settlement_repo import SettlementRepository
from splitbook.repositories.user_repo import UserRepository
from splitbook.schemas.expense import GroupExpensesResponse, GroupInfo
from splitbook.services.balance_engine import accumulate, project

logger = logging.getLogger(__name__)


class GroupService:
    @staticmethod
    async def get_group_expenses(group_id: str, current_user_id: str) -> GroupExpensesResponse:
        """
        Group ledger page: members, records and per-member balances.

        Only members of the group may read it.
        """
        db = await get_database()

        group = await GroupRepository(db).get_group_by_id(group_id)
        if not group:
            raise HTTPException(status_code=404, detail="Group not found")

        if not group.has_member(current_user_id):
            raise HTTPException(status_code=403, detail="You are not a member of this group")

        users = await UserRepository(db).get_users_by_ids(group.member_ids())
        users_by_id = {u.id: u for u in users}

        members = []
        for m in group.members:
            user = users_by_id.get(m.user_id)
            if not user:
                raise HTTPException(status_code=404, detail=f"User {m.user_id} not found")
            members.append(MemberDetails(
                id=user.id,
                name=user.name,
                email=user.email,
                image_url=user.image_url,
                role=m.role,
            ))

        expenses = await ExpenseRepository(db).list_by_group(group_id)
        settlements = await SettlementRepository(db).list_by_group(group_id)

        state = accumulate([m.id for m in members], expenses, settlements)
        balances = project(members, state)

        logger.info(
            "Group %s: %d expenses, %d settlements, %d members",
            group_id, len(expenses), len(settlements), len(members),
        )

        return GroupExpensesResponse(
            group=GroupInfo(id=group.id, name=group.name, description=group.description),
            members=members,
            expenses=expenses,
            settlements=settlements,
            balances=balances,
            user_lookup_map={m.id: m for m in members},
        )

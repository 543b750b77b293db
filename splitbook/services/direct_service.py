import logging

from fastapi import HTTPException

from splitbook.db.session import get_database
from splitbook.models.user import UserSummary
from splitbook.repositories.expense_repo import ExpenseRepository
from splitbook.repositories.settlement_repo import SettlementRepository
from splitbook.repositories.user_repo import UserRepository
from splitbook.schemas.expense import DirectExpensesResponse
from splitbook.services.balance_engine import filter_direct_records, pairwise_balance

logger = logging.getLogger(__name__)


class DirectService:
    @staticmethod
    async def get_expenses_between_users(me: str, other_id: str) -> DirectExpensesResponse:
        """One-on-one records between `me` and `other_id`, newest first, with the balance."""
        if me == other_id:
            raise HTTPException(status_code=400, detail="Cannot query yourself")

        db = await get_database()

        other = await UserRepository(db).get_user_by_id(other_id)
        if not other:
            raise HTTPException(status_code=404, detail="User not found")

        candidates = await ExpenseRepository(db).list_direct_paid_by([me, other_id])
        candidate_settlements = await SettlementRepository(db).list_direct_between(me, other_id)

        # History shows every shared record, settled shares included;
        # only outstanding shares feed the balance
        expenses = [
            e for e in candidates
            if e.group_id is None and e.involves(me) and e.involves(other_id)
        ]
        _, settlements = filter_direct_records(me, other_id, [], candidate_settlements)
        balance = pairwise_balance(me, other_id, expenses, settlements)

        expenses.sort(key=lambda e: e.date, reverse=True)
        settlements.sort(key=lambda s: s.date, reverse=True)

        logger.info("Direct balance %s -> %s: %s", me, other_id, balance)

        return DirectExpensesResponse(
            expenses=expenses,
            settlements=settlements,
            other_user=UserSummary(
                id=other.id,
                name=other.name,
                email=other.email,
                image_url=other.image_url,
            ),
            balance=balance,
        )

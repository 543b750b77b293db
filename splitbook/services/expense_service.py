import logging

from fastapi import HTTPException

from splitbook.db.session import get_database
from splitbook.repositories.expense_repo import ExpenseRepository

logger = logging.getLogger(__name__)


class ExpenseService:
    @staticmethod
    async def delete(expense_id: str, user_id: str) -> bool:
        """Delete an expense. Only its creator or its payer may do so."""
        db = await get_database()
        repo = ExpenseRepository(db)

        expense = await repo.get_by_id(expense_id)
        if not expense:
            raise HTTPException(status_code=404, detail="Expense not found")

        if user_id not in (expense.created_by, expense.paid_by_user_id):
            raise HTTPException(
                status_code=403,
                detail="You don't have permission to delete this expense"
            )

        deleted = await repo.delete(expense_id)
        logger.info("Expense %s deleted by %s", expense_id, user_id)
        return deleted

from fastapi import APIRouter, Depends

from splitbook.core.auth import get_current_user
from splitbook.models.user import User
from splitbook.schemas.expense import DeleteResponse, DirectExpensesResponse
from splitbook.services.direct_service import DirectService
from splitbook.services.expense_service import ExpenseService

router = APIRouter()

@router.get("/between/{user_id}", response_model=DirectExpensesResponse)
async def get_expenses_between_users(
    user_id: str,
    current_user: User = Depends(get_current_user)
):
    """Direct expenses and settlements with another user, plus the running balance"""
    return await DirectService.get_expenses_between_users(current_user.id, user_id)

@router.delete("/{expense_id}", response_model=DeleteResponse)
async def delete_expense(
    expense_id: str,
    current_user: User = Depends(get_current_user)
):
    """Delete an expense (creator or payer only)"""
    await ExpenseService.delete(expense_id, current_user.id)
    return DeleteResponse(success=True)

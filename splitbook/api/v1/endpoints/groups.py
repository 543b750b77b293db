from fastapi import APIRouter, Depends

from splitbook.core.auth import get_current_user
from splitbook.models.user import User
from splitbook.schemas.expense import GroupExpensesResponse
from splitbook.services.group_service import GroupService

router = APIRouter()

@router.get("/{group_id}/expenses", response_model=GroupExpensesResponse)
async def get_group_expenses(group_id: str, current_user: User = Depends(get_current_user)):
    """Expenses, settlements and member balances for a group"""
    return await GroupService.get_group_expenses(group_id, current_user.id)

from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel

from splitbook.models.expense import Expense
from splitbook.models.settlement import Settlement
from splitbook.models.user import MemberDetails, UserSummary
from splitbook.schemas.balance import BalanceView


class GroupInfo(BaseModel):
    id: str
    name: str
    description: Optional[str] = None


class GroupExpensesResponse(BaseModel):
    """Everything needed to render a group's ledger page."""
    group: GroupInfo
    members: List[MemberDetails]
    expenses: List[Expense]
    settlements: List[Settlement]
    balances: List[BalanceView]
    user_lookup_map: Dict[str, MemberDetails]


class DirectExpensesResponse(BaseModel):
    """Direct records between the current user and one other user."""
    expenses: List[Expense]
    settlements: List[Settlement]
    other_user: UserSummary
    balance: Decimal  # > 0: other user owes me


class DeleteResponse(BaseModel):
    success: bool

from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from splitbook.models.expense import Expense
from splitbook.models.settlement import Settlement
from splitbook.models.user import MemberDetails


class DebtEdge(BaseModel):
    """This member owes `to`."""
    to: str
    amount: Decimal


class CreditEdge(BaseModel):
    """`from` owes this member."""
    from_: str = Field(alias="from")
    amount: Decimal

    model_config = ConfigDict(populate_by_name=True)


class BalanceView(BaseModel):
    """Per-member projection of totals and the netted ledger."""
    id: str
    name: str = ""
    image_url: Optional[str] = None
    role: str = "member"
    total_balance: Decimal = Decimal("0")
    owes: List[DebtEdge] = []
    owed_by: List[CreditEdge] = []


class BalanceComputeRequest(BaseModel):
    """Ad hoc reconciliation input."""
    members: List[MemberDetails]
    expenses: List[Expense] = []
    settlements: List[Settlement] = []
    strict: Optional[bool] = None  # None: use STRICT_SPLIT_VALIDATION


class BalanceComputeResponse(BaseModel):
    totals: Dict[str, Decimal]
    ledger: Dict[str, Dict[str, Decimal]]  # netted, non-negative
    balances: List[BalanceView]

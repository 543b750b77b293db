"""
Expense model - a payment made by one member on behalf of others.

Design principles:
- Each split is one member's share of the expense
- A split held by the payer, or marked settled, is not outstanding
- The producer keeps sum(splits) == amount; the balance engine only warns
- All amounts are exact decimals
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from splitbook.models.base import IdStr, Money, MongoModel


class ExpenseSplit(BaseModel):
    """One member's share of one expense."""
    user_id: IdStr
    amount: Money
    settled: bool = False  # share already resolved outside the ledger


class Expense(MongoModel):
    description: str = ""
    amount: Money
    paid_by_user_id: IdStr
    split_type: str = "equal"  # equal | percentage | exact
    splits: List[ExpenseSplit] = []
    group_id: Optional[IdStr] = None  # None for direct, person-to-person expenses
    category: Optional[str] = None
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    created_by: Optional[IdStr] = None

    def involves(self, user_id: str) -> bool:
        """True if user paid for this expense or holds one of its splits."""
        return self.paid_by_user_id == user_id or any(
            s.user_id == user_id for s in self.splits
        )

    def splits_total(self) -> Decimal:
        return sum((s.amount for s in self.splits), Decimal("0"))

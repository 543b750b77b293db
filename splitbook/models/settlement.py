from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from splitbook.models.base import IdStr, Money, MongoModel


class Settlement(MongoModel):
    """Direct payment from one member to another."""
    amount: Money = Field(gt=0)
    paid_by_user_id: IdStr
    received_by_user_id: IdStr
    group_id: Optional[IdStr] = None
    note: Optional[str] = None
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    created_by: Optional[IdStr] = None

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

from splitbook.models.base import IdStr, MongoModel


class GroupMember(BaseModel):
    user_id: IdStr
    role: str = "member"  # "admin" or "member"
    joined_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Group(MongoModel):
    name: str
    description: Optional[str] = None
    created_by: Optional[IdStr] = None
    members: List[GroupMember] = []

    def member_ids(self) -> List[str]:
        return [m.user_id for m in self.members]

    def has_member(self, user_id: str) -> bool:
        return any(m.user_id == user_id for m in self.members)

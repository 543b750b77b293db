from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from splitbook.models.base import IdStr, MongoModel


class User(MongoModel):
    """User document as stored by the identity collaborator."""
    name: str
    email: str = ""
    image_url: Optional[str] = None
    token_identifier: Optional[str] = None


class MemberDetails(BaseModel):
    """Resolved member identity used for display alongside balances."""
    id: IdStr
    name: str
    email: str = ""
    image_url: Optional[str] = None
    role: str = "member"

    model_config = ConfigDict(from_attributes=True)


class UserSummary(BaseModel):
    """Counterparty details returned with a direct balance."""
    id: IdStr = Field(validation_alias="_id")
    name: str
    email: str = ""
    image_url: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

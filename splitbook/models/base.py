from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Any

from bson import Decimal128, ObjectId
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _coerce_id(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    return value


def _coerce_money(value: Any) -> Any:
    # Mongo hands back Decimal128 for exact amounts; floats go through str
    # so 0.1 stays Decimal("0.1").
    if isinstance(value, Decimal128):
        return value.to_decimal()
    if isinstance(value, float):
        return Decimal(str(value))
    return value


IdStr = Annotated[str, BeforeValidator(_coerce_id)]
Money = Annotated[Decimal, BeforeValidator(_coerce_money)]


def to_object_id(value: str) -> ObjectId:
    """Parse a hex id, raising ValueError for anything else."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    raise ValueError("Invalid ObjectId")


class MongoModel(BaseModel):
    id: IdStr = Field(default_factory=lambda: str(ObjectId()), validation_alias="_id")
    created_at: datetime = Field(default_factory=_utcnow)

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True
    )

# backend/modules/sweets/schemas/sweet_schemas.py

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SweetSchema(BaseModel):
    """Sweets are exchanged in camelCase (``imageUrl``, ``createdAt``)"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Request bodies only check shapes and types; stock and price rules are
# enforced by SweetService so they hold for every caller.
class SweetCreate(SweetSchema):
    name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[Decimal] = None
    quantity: Optional[int] = None
    description: Optional[str] = None
    image_url: Optional[str] = None


class SweetUpdate(SweetSchema):
    name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[Decimal] = None
    quantity: Optional[int] = None
    description: Optional[str] = None
    image_url: Optional[str] = None


class StockChange(SweetSchema):
    quantity: Optional[int] = None


class Sweet(SweetSchema):
    id: UUID
    name: str
    category: str
    price: float
    quantity: int
    description: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class SweetListResponse(SweetSchema):
    sweets: List[Sweet]


class SweetDetailResponse(SweetSchema):
    sweet: Sweet


class SweetMutationResponse(SweetSchema):
    message: str
    sweet: Sweet


class MessageResponse(SweetSchema):
    message: str

from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

# items/quantities as an object or a list of line items
OrderPayload = Union[Dict[str, Any], List[Any]]


class OrderCreate(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN, description="Owner of the order")
    order: OrderPayload = Field(..., description="Purchased items and quantities")


class OrderReplace(BaseModel):
    order: OrderPayload = Field(...)
    email: Optional[str] = Field(None, pattern=EMAIL_PATTERN, description="Required when the order does not exist yet")


class PaymentIntentRequest(BaseModel):
    price: Decimal


class ToolCreate(BaseModel):
    name: str
    description: str = ""
    image: Optional[str] = None
    price: Decimal = Field(..., gt=0)
    minimumQuantity: int = Field(1, ge=1)
    availableQuantity: int = Field(0, ge=0)


class ToolUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    price: Optional[Decimal] = Field(None, gt=0)
    minimumQuantity: Optional[int] = Field(None, ge=1)
    availableQuantity: Optional[int] = Field(None, ge=0)


class ReviewCreate(BaseModel):
    name: str
    email: Optional[str] = Field(None, pattern=EMAIL_PATTERN)
    rating: int = Field(..., ge=1, le=5)
    comment: str = ""

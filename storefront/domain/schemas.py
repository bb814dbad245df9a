# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel
from typing import List, Optional
from decimal import Decimal
from datetime import datetime

#ids are INTEGER columns, money is NUMERIC(10, 2)
MAX_ID = 2**31 - 1
MAX_MONEY_DIGITS = 10
MONEY_PLACES = 2


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        coerce_numbers_to_str=True,
    )


class ProductOut(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    image: Optional[str] = None
    created_at: datetime


class CartItemIn(CamelModel):
    """Schema for adding a product to the cart."""

    user_id: str = Field(..., min_length=1, description="User id")
    product_id: int = Field(..., gt=0, le=MAX_ID, description="Product id (must be > 0)")
    quantity: Optional[int] = Field(None, ge=0, le=MAX_ID, description="Quantity to add, 1 when omitted or 0")


class CartItemAdjust(CamelModel):
    """Schema for changing the quantity of a cart item by a delta."""

    delta: int = Field(..., ge=-MAX_ID, le=MAX_ID, description="Quantity change, e.g. -1 or +1")


class CartItemOut(CamelModel):
    id: int
    user_id: str
    product_id: int
    quantity: int
    product: Optional[ProductOut] = None


class FavoriteIn(CamelModel):
    user_id: str = Field(..., min_length=1, description="User id")
    product_id: int = Field(..., gt=0, le=MAX_ID, description="Product id (must be > 0)")


class FavoriteOut(CamelModel):
    id: int
    user_id: str
    product_id: int
    created_at: datetime
    product: Optional[ProductOut] = None


class OrderLineIn(CamelModel):
    """Single order line, price captured by the client at checkout."""

    product_id: int = Field(..., gt=0, le=MAX_ID)
    quantity: int = Field(..., gt=0, le=MAX_ID)
    price: Decimal = Field(..., ge=0, max_digits=MAX_MONEY_DIGITS, decimal_places=MONEY_PLACES)


class OrderCreate(CamelModel):
    user_id: str = Field(..., min_length=1, description="User id")
    items: List[OrderLineIn] = Field(..., min_length=1)


class OrderItemOut(CamelModel):
    id: int
    order_id: int
    product_id: int
    quantity: int
    price: Decimal
    product: Optional[ProductOut] = None


class OrderOut(CamelModel):
    id: int
    user_id: str
    total: Decimal
    created_at: datetime


class OrderDetailOut(OrderOut):
    items: List[OrderItemOut] = []


class DeletedOut(CamelModel):
    ok: bool = True
    deleted: bool = True

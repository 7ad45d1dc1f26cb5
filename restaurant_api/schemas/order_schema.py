from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from . import DocumentOut, ORMModel, UpdateModel


# ORDER
class OrderCreate(ORMModel):
    table_id: Optional[str] = None


class OrderUpdate(UpdateModel):
    clearable_fields = ("table_id",)

    table_id: Optional[str] = None


class OrderOut(DocumentOut):
    order_id: str
    order_date: Optional[datetime] = None
    table_id: Optional[str] = None


# ORDER_ITEM
class OrderItemBase(ORMModel):
    food_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    unit_price: float = Field(..., ge=0)


class OrderItemCreate(OrderItemBase):
    pass


class OrderItemUpdate(UpdateModel):
    food_id: Optional[str] = Field(None, min_length=1)
    quantity: Optional[int] = Field(None, ge=1)
    unit_price: Optional[float] = Field(None, ge=0)


class OrderItemOut(DocumentOut):
    order_item_id: str
    order_id: Optional[str] = None
    food_id: Optional[str] = None
    quantity: Optional[int] = None
    unit_price: Optional[float] = None


class OrderItemPack(BaseModel):
    """Body of ``POST /orderItems``.

    Items stay loosely typed here; each one is validated after the order has
    been persisted.
    """
    table_id: Optional[str] = None
    order_items: List[Any] = Field(..., min_length=1)


class OrderWithItemsOut(BaseModel):
    order: OrderOut
    order_items: List[OrderItemOut]


class OrderItemsByOrderOut(BaseModel):
    order_id: str
    table_id: Optional[str] = None
    order_items: List[OrderItemOut]
    total_amount: float

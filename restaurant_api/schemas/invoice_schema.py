from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from . import DocumentOut, ORMModel, PaymentMethod, PaymentStatus, UpdateModel
from .order_schema import OrderItemOut


class InvoiceBase(ORMModel):
    order_id: str
    payment_method: Optional[PaymentMethod] = None
    payment_status: PaymentStatus = PaymentStatus.PENDING


class InvoiceCreate(InvoiceBase):
    pass


class InvoiceUpdate(UpdateModel):
    clearable_fields = ("payment_method",)

    order_id: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None
    payment_status: Optional[PaymentStatus] = None


class InvoiceOut(DocumentOut):
    invoice_id: str
    order_id: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None
    payment_status: Optional[PaymentStatus] = None
    payment_due_date: Optional[datetime] = None


class InvoiceViewOut(BaseModel):
    invoice_id: str
    order_id: str
    table_id: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None
    payment_status: PaymentStatus
    payment_due_date: Optional[datetime] = None
    payment_due: float
    order_details: List[OrderItemOut]

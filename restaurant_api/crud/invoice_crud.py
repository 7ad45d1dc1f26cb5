from datetime import timedelta
from typing import Any, Dict, Optional

from restaurant_api.crud.mongo_crud import MongoCRUD
from restaurant_api.crud.order_crud import OrderLifecycle
from restaurant_api.schemas import PaymentStatus
from restaurant_api.schemas.invoice_schema import InvoiceCreate, InvoiceUpdate
from restaurant_api.utils.deadline import Deadline
from restaurant_api.utils.errors import ReferenceNotFound
from restaurant_api.utils.helper import utc_now

PAYMENT_TERM = timedelta(days=1)


class CRUDInvoice:
    def __init__(self, invoices: MongoCRUD, order_lifecycle: OrderLifecycle):
        self.invoices = invoices
        self.order_lifecycle = order_lifecycle

    async def _require_order(self, order_id: str, deadline: Optional[Deadline]) -> None:
        order = await self.order_lifecycle.orders.find_one({"order_id": order_id}, deadline=deadline)
        if order is None:
            raise ReferenceNotFound("order was not found")

    async def create(self, obj_in: InvoiceCreate, deadline: Optional[Deadline] = None) -> Dict[str, Any]:
        await self._require_order(obj_in.order_id, deadline)
        document = obj_in.model_dump()
        document["payment_due_date"] = utc_now() + PAYMENT_TERM
        return await self.invoices.insert_one(document, deadline=deadline)

    async def update(self, invoice_id: str, obj_in: InvoiceUpdate, deadline: Optional[Deadline] = None) -> Dict[str, Any]:
        fields = obj_in.to_update()
        if "order_id" in fields:
            await self._require_order(fields["order_id"], deadline)
        return await self.invoices.upsert_by_business_id(invoice_id, fields, deadline=deadline)

    async def view(self, invoice_id: str, deadline: Optional[Deadline] = None) -> Dict[str, Any]:
        """Invoice joined with its order's items and the amount due."""
        invoice = await self.invoices.find_by_business_id(invoice_id, deadline=deadline)
        if not invoice.get("order_id"):
            raise ReferenceNotFound("invoice is not linked to an order")
        order = await self.order_lifecycle.items_by_order(invoice["order_id"], deadline=deadline)
        return {
            "invoice_id": invoice["invoice_id"],
            "order_id": invoice["order_id"],
            "table_id": order["table_id"],
            "payment_method": invoice.get("payment_method"),
            "payment_status": invoice.get("payment_status", PaymentStatus.PENDING.value),
            "payment_due_date": invoice.get("payment_due_date"),
            "payment_due": order["total_amount"],
            "order_details": order["order_items"],
        }

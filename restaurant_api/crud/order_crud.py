"""Order lifecycle.

``POST /orderItems`` runs through these steps, stopping at the first failure:

    received -> order persisted -> items validated -> items persisted -> responded

The order is written before its items are validated and there is no
transaction across the two writes, so a rejected or failed batch leaves an
order without items behind.
"""
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as SchemaError

from restaurant_api.crud.mongo_crud import MongoCRUD
from restaurant_api.schemas.order_schema import OrderItemCreate, OrderItemPack, OrderItemUpdate, OrderUpdate
from restaurant_api.utils.deadline import Deadline
from restaurant_api.utils.errors import PersistenceFailure, ReferenceNotFound, ValidationError
from restaurant_api.utils.helper import to_fixed, utc_now

logger = logging.getLogger(__name__)


def _describe(exc: SchemaError) -> str:
    messages = []
    for error in exc.errors():
        # a non-object item fails at the root and has no field location
        location = ".".join(str(part) for part in error["loc"])
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(messages)


class OrderLifecycle:
    def __init__(self, orders: MongoCRUD, order_items: MongoCRUD, tables: MongoCRUD):
        self.orders = orders
        self.order_items = order_items
        self.tables = tables

    async def _require_table(self, table_id: str, deadline: Optional[Deadline]) -> None:
        table = await self.tables.find_one({"table_id": table_id}, deadline=deadline)
        if table is None:
            raise ReferenceNotFound("table was not found")

    # -------- ORDERS --------
    async def create_order(self, table_id: Optional[str] = None, deadline: Optional[Deadline] = None) -> Dict[str, Any]:
        if table_id is not None:
            await self._require_table(table_id, deadline)
        order = await self.orders.insert_one({"order_date": utc_now(), "table_id": table_id}, deadline=deadline)
        logger.info("order %s created for table %s", order["order_id"], table_id)
        return order

    async def update_order(self, order_id: str, obj_in: OrderUpdate, deadline: Optional[Deadline] = None) -> Dict[str, Any]:
        fields = obj_in.to_update()
        if fields.get("table_id") is not None:
            await self._require_table(fields["table_id"], deadline)
        return await self.orders.upsert_by_business_id(order_id, fields, deadline=deadline)

    # -------- ORDER ITEMS --------
    def _build_items(self, order_id: str, items: List[Any]) -> List[Dict[str, Any]]:
        documents = []
        for position, raw in enumerate(items, start=1):
            try:
                item = OrderItemCreate.model_validate(raw)
            except SchemaError as exc:
                raise ValidationError(f"order item {position} is invalid: {_describe(exc)}")
            document = item.model_dump()
            document["order_id"] = order_id
            document["unit_price"] = to_fixed(item.unit_price, 2)
            documents.append(document)
        return documents

    async def create_order_item_batch(
        self, order_id: str, items: List[Any], deadline: Optional[Deadline] = None
    ) -> List[Dict[str, Any]]:
        """Validate every item, then write the whole batch with one bulk insert.

        A single invalid item rejects the batch before anything is written.
        """
        documents = self._build_items(order_id, items)
        try:
            inserted = await self.order_items.insert_many(documents, deadline=deadline)
        except PersistenceFailure:
            logger.error("order %s is persisted but its %d items were not", order_id, len(documents))
            raise
        logger.info("order %s: %d items created", order_id, len(inserted))
        return inserted

    async def create_order_with_items(self, pack: OrderItemPack, deadline: Optional[Deadline] = None) -> Dict[str, Any]:
        order = await self.create_order(pack.table_id, deadline=deadline)
        try:
            items = await self.create_order_item_batch(order["order_id"], pack.order_items, deadline=deadline)
        except ValidationError:
            logger.warning("order %s kept without items after a rejected batch", order["order_id"])
            raise
        return {"order": order, "order_items": items}

    async def update_order_item(self, order_item_id: str, obj_in: OrderItemUpdate, deadline: Optional[Deadline] = None) -> Dict[str, Any]:
        fields = obj_in.to_update()
        if "unit_price" in fields:
            fields["unit_price"] = to_fixed(fields["unit_price"], 2)
        return await self.order_items.upsert_by_business_id(order_item_id, fields, deadline=deadline)

    async def items_by_order(self, order_id: str, deadline: Optional[Deadline] = None) -> Dict[str, Any]:
        order = await self.orders.find_by_business_id(order_id, deadline=deadline)
        items = await self.order_items.find_many({"order_id": order_id}, deadline=deadline)
        total = sum((item.get("unit_price") or 0) * (item.get("quantity") or 0) for item in items)
        return {
            "order_id": order_id,
            "table_id": order.get("table_id"),
            "order_items": items,
            "total_amount": to_fixed(total, 2),
        }

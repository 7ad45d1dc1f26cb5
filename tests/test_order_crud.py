import pytest
from pymongo.errors import BulkWriteError

from restaurant_api.schemas.order_schema import OrderItemPack, OrderItemUpdate, OrderUpdate
from restaurant_api.utils.errors import NotFound, PersistenceFailure, ReferenceNotFound, ValidationError


def _item(food_id="f1", quantity=1, unit_price=9.99):
    return {"food_id": food_id, "quantity": quantity, "unit_price": unit_price}


async def test_create_order_without_table(context):
    order = await context.order_lifecycle.create_order()
    assert order["table_id"] is None
    assert order["order_date"] is not None
    assert await context.orders.count() == 1


async def test_create_order_with_existing_table(context):
    table = await context.tables.insert_one({"table_number": 1, "number_of_guests": 2})
    order = await context.order_lifecycle.create_order(table["table_id"])
    assert order["table_id"] == table["table_id"]


async def test_create_order_with_missing_table_persists_nothing(context):
    with pytest.raises(ReferenceNotFound):
        await context.order_lifecycle.create_order("0123456789abcdef01234567")
    assert await context.orders.count() == 0


async def test_update_order_checks_table(context):
    order = await context.order_lifecycle.create_order()
    with pytest.raises(ReferenceNotFound):
        await context.order_lifecycle.update_order(order["order_id"], OrderUpdate(table_id="missing"))


async def test_batch_assigns_order_and_rounds_prices(context):
    order = await context.order_lifecycle.create_order()

    items = await context.order_lifecycle.create_order_item_batch(
        order["order_id"], [_item(unit_price=3.14159), _item("f2", 2, 10.999)]
    )

    assert [item["unit_price"] for item in items] == [3.14, 11.0]
    assert {item["order_id"] for item in items} == {order["order_id"]}
    assert len({item["order_item_id"] for item in items}) == 2
    assert await context.order_items.count({"order_id": order["order_id"]}) == 2


async def test_invalid_item_rejects_whole_batch_but_keeps_order(context):
    pack = OrderItemPack(order_items=[_item(), _item(), {"food_id": "f3", "quantity": 0}, _item(), _item()])

    with pytest.raises(ValidationError) as exc_info:
        await context.order_lifecycle.create_order_with_items(pack)

    assert exc_info.value.status_code == 400
    assert "order item 3" in exc_info.value.detail
    assert await context.order_items.count() == 0
    assert await context.orders.count() == 1


@pytest.mark.parametrize("bad_item", ["junk", 42, None, ["f1", 1, 2.0]])
async def test_non_object_item_rejects_batch_after_order(context, bad_item):
    pack = OrderItemPack(order_items=[_item(), _item(), bad_item])

    with pytest.raises(ValidationError) as exc_info:
        await context.order_lifecycle.create_order_with_items(pack)

    assert "order item 3" in exc_info.value.detail
    assert await context.order_items.count() == 0
    assert await context.orders.count() == 1


async def test_bulk_insert_failure_keeps_order(context, monkeypatch):
    class RejectingCollection:
        async def insert_many(self, documents, *args, **kwargs):
            raise BulkWriteError({"writeErrors": [], "nInserted": 0})

    monkeypatch.setattr(context.order_items, "collection", RejectingCollection())

    with pytest.raises(PersistenceFailure) as exc_info:
        await context.order_lifecycle.create_order_with_items(OrderItemPack(order_items=[_item()]))
    assert exc_info.value.detail == "error while accessing order item records"
    assert await context.orders.count() == 1


async def test_create_order_with_items_missing_table(context):
    pack = OrderItemPack(table_id="0123456789abcdef01234567", order_items=[_item()])
    with pytest.raises(ReferenceNotFound):
        await context.order_lifecycle.create_order_with_items(pack)
    assert await context.orders.count() == 0
    assert await context.order_items.count() == 0


async def test_items_by_order(context):
    result = await context.order_lifecycle.create_order_with_items(
        OrderItemPack(order_items=[_item(quantity=2, unit_price=4.5), _item("f2", 1, 1.25)])
    )
    other = await context.order_lifecycle.create_order_with_items(OrderItemPack(order_items=[_item()]))
    order_id = result["order"]["order_id"]

    by_order = await context.order_lifecycle.items_by_order(order_id)

    assert by_order["order_id"] == order_id
    assert len(by_order["order_items"]) == 2
    assert by_order["total_amount"] == 10.25
    assert other["order"]["order_id"] != order_id


async def test_items_by_unknown_order(context):
    with pytest.raises(NotFound):
        await context.order_lifecycle.items_by_order("0123456789abcdef01234567")


async def test_update_order_item_rounds_price(context):
    result = await context.order_lifecycle.create_order_with_items(OrderItemPack(order_items=[_item()]))
    item_id = result["order_items"][0]["order_item_id"]

    await context.order_lifecycle.update_order_item(item_id, OrderItemUpdate(unit_price=5.556))

    stored = await context.order_items.find_by_business_id(item_id)
    assert stored["unit_price"] == 5.56
    assert stored["quantity"] == 1

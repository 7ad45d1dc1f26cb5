from fastapi import APIRouter, Depends

from restaurant_api.database import AppContext, get_context, get_deadline
from restaurant_api.schemas import Page, UpdateResultOut
from restaurant_api.schemas.order_schema import (
    OrderItemOut,
    OrderItemPack,
    OrderItemsByOrderOut,
    OrderItemUpdate,
    OrderWithItemsOut,
)
from restaurant_api.utils.deadline import Deadline
from restaurant_api.utils.pagination import PageParams

router = APIRouter(tags=["Order Items"])


@router.get("/orderItems", response_model=Page[OrderItemOut])
async def get_order_items(
    params: PageParams = Depends(),
    ctx: AppContext = Depends(get_context),
    deadline: Deadline = Depends(get_deadline),
):
    return await ctx.order_items.find_page(params.page_size, params.page, params.start_index, deadline=deadline)


@router.get("/orderItems-order/{order_id}", response_model=OrderItemsByOrderOut)
async def get_order_items_by_order(order_id: str, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.order_lifecycle.items_by_order(order_id, deadline=deadline)


@router.get("/orderItems/{order_item_id}", response_model=OrderItemOut)
async def get_order_item(order_item_id: str, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.order_items.find_by_business_id(order_item_id, deadline=deadline)


@router.post("/orderItems", response_model=OrderWithItemsOut)
async def create_order_items(pack: OrderItemPack, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.order_lifecycle.create_order_with_items(pack, deadline=deadline)


@router.patch("/orderItems/{order_item_id}", response_model=UpdateResultOut)
async def update_order_item(
    order_item_id: str,
    obj_in: OrderItemUpdate,
    ctx: AppContext = Depends(get_context),
    deadline: Deadline = Depends(get_deadline),
):
    return await ctx.order_lifecycle.update_order_item(order_item_id, obj_in, deadline=deadline)

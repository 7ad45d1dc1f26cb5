from fastapi import APIRouter, Depends

from restaurant_api.database import AppContext, get_context, get_deadline
from restaurant_api.schemas import Page, UpdateResultOut
from restaurant_api.schemas.order_schema import OrderCreate, OrderOut, OrderUpdate
from restaurant_api.utils.deadline import Deadline
from restaurant_api.utils.pagination import PageParams

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.get("", response_model=Page[OrderOut])
async def get_orders(
    params: PageParams = Depends(),
    ctx: AppContext = Depends(get_context),
    deadline: Deadline = Depends(get_deadline),
):
    return await ctx.orders.find_page(params.page_size, params.page, params.start_index, deadline=deadline)


@router.get("/{order_id}", response_model=OrderOut)
async def get_order(order_id: str, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.orders.find_by_business_id(order_id, deadline=deadline)


@router.post("", response_model=OrderOut)
async def create_order(obj_in: OrderCreate, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.order_lifecycle.create_order(obj_in.table_id, deadline=deadline)


@router.patch("/{order_id}", response_model=UpdateResultOut)
async def update_order(order_id: str, obj_in: OrderUpdate, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.order_lifecycle.update_order(order_id, obj_in, deadline=deadline)

from fastapi import APIRouter, Depends

from restaurant_api.database import AppContext, get_context, get_deadline
from restaurant_api.schemas import Page, UpdateResultOut
from restaurant_api.schemas.table_schema import TableCreate, TableOut, TableUpdate
from restaurant_api.utils.deadline import Deadline
from restaurant_api.utils.pagination import PageParams

router = APIRouter(prefix="/tables", tags=["Tables"])


@router.get("", response_model=Page[TableOut])
async def get_tables(
    params: PageParams = Depends(),
    ctx: AppContext = Depends(get_context),
    deadline: Deadline = Depends(get_deadline),
):
    return await ctx.tables.find_page(params.page_size, params.page, params.start_index, deadline=deadline)


@router.get("/{table_id}", response_model=TableOut)
async def get_table(table_id: str, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.tables.find_by_business_id(table_id, deadline=deadline)


@router.post("", response_model=TableOut)
async def create_table(obj_in: TableCreate, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.tables.insert_one(obj_in.model_dump(), deadline=deadline)


@router.patch("/{table_id}", response_model=UpdateResultOut)
async def update_table(table_id: str, obj_in: TableUpdate, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.tables.upsert_by_business_id(table_id, obj_in.to_update(), deadline=deadline)

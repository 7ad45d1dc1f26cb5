from fastapi import APIRouter, Depends

from restaurant_api.database import AppContext, get_context, get_deadline
from restaurant_api.schemas import Page, UpdateResultOut
from restaurant_api.schemas.menu_schema import MenuCreate, MenuOut, MenuUpdate
from restaurant_api.utils.deadline import Deadline
from restaurant_api.utils.pagination import PageParams

router = APIRouter(prefix="/menus", tags=["Menus"])


@router.get("", response_model=Page[MenuOut])
async def get_menus(
    params: PageParams = Depends(),
    ctx: AppContext = Depends(get_context),
    deadline: Deadline = Depends(get_deadline),
):
    return await ctx.menus.find_page(params.page_size, params.page, params.start_index, deadline=deadline)


@router.get("/{menu_id}", response_model=MenuOut)
async def get_menu(menu_id: str, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.menus.find_by_business_id(menu_id, deadline=deadline)


@router.post("", response_model=MenuOut)
async def create_menu(obj_in: MenuCreate, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.menu_crud.create(obj_in, deadline=deadline)


@router.patch("/{menu_id}", response_model=UpdateResultOut)
async def update_menu(menu_id: str, obj_in: MenuUpdate, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.menu_crud.update(menu_id, obj_in, deadline=deadline)


@router.delete("/{menu_id}")
async def delete_menu(menu_id: str, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.menus.delete_by_business_id(menu_id, deadline=deadline)

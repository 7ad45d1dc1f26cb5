from fastapi import APIRouter, Depends

from restaurant_api.database import AppContext, get_context, get_deadline
from restaurant_api.schemas import Page, UpdateResultOut
from restaurant_api.schemas.food_schema import FoodCreate, FoodOut, FoodUpdate
from restaurant_api.utils.deadline import Deadline
from restaurant_api.utils.pagination import PageParams

router = APIRouter(prefix="/foods", tags=["Foods"])


# Get all food items with pagination
@router.get("", response_model=Page[FoodOut])
async def get_foods(
    params: PageParams = Depends(),
    ctx: AppContext = Depends(get_context),
    deadline: Deadline = Depends(get_deadline),
):
    return await ctx.foods.find_page(params.page_size, params.page, params.start_index, deadline=deadline)


# Get single food item
@router.get("/{food_id}", response_model=FoodOut)
async def get_food(food_id: str, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.foods.find_by_business_id(food_id, deadline=deadline)


# Create new food item
@router.post("", response_model=FoodOut)
async def create_food(obj_in: FoodCreate, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.food_crud.create(obj_in, deadline=deadline)


# Update existing food item
@router.patch("/{food_id}", response_model=UpdateResultOut)
async def update_food(food_id: str, obj_in: FoodUpdate, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.food_crud.update(food_id, obj_in, deadline=deadline)

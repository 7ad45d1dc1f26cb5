from fastapi import APIRouter, Depends

from restaurant_api.database import AppContext, get_context, get_deadline
from restaurant_api.schemas import Page
from restaurant_api.schemas.user_schema import (
    AuthenticatedUserOut,
    LoginRequest,
    RefreshRequest,
    TokenPairOut,
    UserCreate,
    UserOut,
)
from restaurant_api.utils.deadline import Deadline
from restaurant_api.utils.pagination import PageParams

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=Page[UserOut])
async def get_users(
    params: PageParams = Depends(),
    ctx: AppContext = Depends(get_context),
    deadline: Deadline = Depends(get_deadline),
):
    return await ctx.users.find_page(params.page_size, params.page, params.start_index, deadline=deadline)


@router.post("/signup", response_model=AuthenticatedUserOut)
async def signup(user: UserCreate, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.user_crud.create(user, deadline=deadline)


@router.api_route("/login", methods=["PATCH", "POST"], response_model=AuthenticatedUserOut)
async def login(credentials: LoginRequest, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.user_crud.login(credentials.email, credentials.password, deadline=deadline)


@router.post("/refresh", response_model=TokenPairOut)
async def refresh_tokens(body: RefreshRequest, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.user_crud.refresh(body.refresh_token, deadline=deadline)


@router.get("/{user_id}", response_model=UserOut)
async def get_user(user_id: str, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.users.find_by_business_id(user_id, deadline=deadline)

from fastapi import APIRouter, Depends

from restaurant_api.database import AppContext, get_context, get_deadline
from restaurant_api.schemas import Page, UpdateResultOut
from restaurant_api.schemas.invoice_schema import InvoiceCreate, InvoiceOut, InvoiceUpdate, InvoiceViewOut
from restaurant_api.utils.deadline import Deadline
from restaurant_api.utils.pagination import PageParams

router = APIRouter(prefix="/invoices", tags=["Invoices"])


@router.get("", response_model=Page[InvoiceOut])
async def get_invoices(
    params: PageParams = Depends(),
    ctx: AppContext = Depends(get_context),
    deadline: Deadline = Depends(get_deadline),
):
    return await ctx.invoices.find_page(params.page_size, params.page, params.start_index, deadline=deadline)


@router.get("/{invoice_id}", response_model=InvoiceViewOut)
async def get_invoice(invoice_id: str, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.invoice_crud.view(invoice_id, deadline=deadline)


@router.post("", response_model=InvoiceOut)
async def create_invoice(obj_in: InvoiceCreate, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.invoice_crud.create(obj_in, deadline=deadline)


@router.patch("/{invoice_id}", response_model=UpdateResultOut)
async def update_invoice(invoice_id: str, obj_in: InvoiceUpdate, ctx: AppContext = Depends(get_context), deadline: Deadline = Depends(get_deadline)):
    return await ctx.invoice_crud.update(invoice_id, obj_in, deadline=deadline)

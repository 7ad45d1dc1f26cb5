from __future__ import annotations

from typing import Optional

from pydantic import Field

from . import DocumentOut, ORMModel, UpdateModel


class FoodBase(ORMModel):
    name: str = Field(..., min_length=2, max_length=100)
    price: float = Field(..., ge=0)
    food_image: Optional[str] = Field(None, max_length=255)


class FoodCreate(FoodBase):
    # Either an existing menu, or a category whose menu is created on demand.
    menu_id: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1, max_length=100)


class FoodUpdate(UpdateModel):
    clearable_fields = ("food_image",)

    name: Optional[str] = Field(None, min_length=2, max_length=100)
    price: Optional[float] = Field(None, ge=0)
    food_image: Optional[str] = Field(None, max_length=255)
    menu_id: Optional[str] = None


class FoodOut(DocumentOut):
    food_id: str
    name: Optional[str] = None
    price: Optional[float] = None
    food_image: Optional[str] = None
    menu_id: Optional[str] = None

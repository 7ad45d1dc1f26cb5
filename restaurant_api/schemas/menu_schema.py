from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from . import DocumentOut, ORMModel, UpdateModel


class MenuBase(ORMModel):
    name: str = Field(..., min_length=1, max_length=100)
    category: str = Field(..., min_length=1, max_length=100)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class MenuCreate(MenuBase):
    pass


class MenuUpdate(UpdateModel):
    clearable_fields = ("start_date", "end_date")

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class MenuOut(DocumentOut):
    # Upserts may create a menu from a partial body, so nothing but the id is guaranteed.
    menu_id: str
    name: Optional[str] = None
    category: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

from __future__ import annotations

from typing import Optional

from pydantic import Field

from . import DocumentOut, ORMModel, UpdateModel


class TableBase(ORMModel):
    number_of_guests: int = Field(..., ge=1)
    table_number: int = Field(..., ge=1)


class TableCreate(TableBase):
    pass


class TableUpdate(UpdateModel):
    number_of_guests: Optional[int] = Field(None, ge=1)
    table_number: Optional[int] = Field(None, ge=1)


class TableOut(DocumentOut):
    table_id: str
    number_of_guests: Optional[int] = None
    table_number: Optional[int] = None

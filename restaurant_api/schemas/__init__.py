from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, Generic, List, Optional, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict


# Shared Pydantic base (Pydantic v2); enums are dumped as plain values so documents stay BSON-encodable
class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True, use_enum_values=True, validate_default=True)


class UpdateModel(ORMModel):
    """Partial update body.

    Omitted fields are left untouched. An explicit ``null`` clears the field,
    but only for the fields listed in ``clearable_fields``; for the others it
    is ignored like an omission.
    """
    clearable_fields: ClassVar[Tuple[str, ...]] = ()

    def to_update(self) -> Dict[str, Any]:
        data = self.model_dump(exclude_unset=True)
        return {k: v for k, v in data.items() if v is not None or k in self.clearable_fields}


class DocumentOut(ORMModel):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    total_count: int
    items: List[T]


class UpdateResultOut(BaseModel):
    matched_count: int
    modified_count: int
    upserted_id: Optional[str] = None


# Enums shared across schemas
class UserType(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class PaymentMethod(str, Enum):
    CARD = "CARD"
    CASH = "CASH"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"

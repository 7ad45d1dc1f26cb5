from datetime import datetime
from typing import Any, Dict, Optional

from restaurant_api.crud.mongo_crud import MongoCRUD
from restaurant_api.schemas.menu_schema import MenuCreate, MenuUpdate
from restaurant_api.utils.deadline import Deadline
from restaurant_api.utils.errors import ValidationError
from restaurant_api.utils.helper import to_utc, utc_now


def check_time_span(start_date: Optional[datetime], end_date: Optional[datetime]) -> None:
    """A menu window must be complete, ordered and end in the future."""
    if start_date is None and end_date is None:
        return
    if start_date is None or end_date is None:
        raise ValidationError("start_date and end_date must be supplied together")
    if to_utc(start_date) >= to_utc(end_date):
        raise ValidationError("start_date must be before end_date")
    if to_utc(end_date) <= to_utc(utc_now()):
        raise ValidationError("end_date must be in the future")


class CRUDMenu:
    def __init__(self, menus: MongoCRUD):
        self.menus = menus

    async def create(self, obj_in: MenuCreate, deadline: Optional[Deadline] = None) -> Dict[str, Any]:
        check_time_span(obj_in.start_date, obj_in.end_date)
        return await self.menus.insert_one(obj_in.model_dump(), deadline=deadline)

    async def update(self, menu_id: str, obj_in: MenuUpdate, deadline: Optional[Deadline] = None) -> Dict[str, Any]:
        fields = obj_in.to_update()
        if "start_date" in fields or "end_date" in fields:
            stored = await self.menus.find_one({"menu_id": menu_id}, deadline=deadline) or {}
            # an omitted end of the window keeps its stored value
            window = {key: fields.get(key, stored.get(key)) for key in ("start_date", "end_date")}
            check_time_span(window["start_date"], window["end_date"])
        return await self.menus.upsert_by_business_id(menu_id, fields, deadline=deadline)

    async def get_or_create_for_category(self, category: str, deadline: Optional[Deadline] = None) -> Dict[str, Any]:
        menu = await self.menus.find_one({"category": category}, deadline=deadline)
        if menu is None:
            menu = await self.menus.insert_one({"name": category, "category": category}, deadline=deadline)
        return menu

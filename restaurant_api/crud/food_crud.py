from typing import Any, Dict, Optional

from restaurant_api.crud.menu_crud import CRUDMenu
from restaurant_api.crud.mongo_crud import MongoCRUD
from restaurant_api.schemas.food_schema import FoodCreate, FoodUpdate
from restaurant_api.utils.deadline import Deadline
from restaurant_api.utils.errors import ReferenceNotFound, ValidationError
from restaurant_api.utils.helper import to_fixed


class CRUDFood:
    def __init__(self, foods: MongoCRUD, menu_crud: CRUDMenu):
        self.foods = foods
        self.menu_crud = menu_crud

    async def _require_menu(self, menu_id: str, deadline: Optional[Deadline]) -> Dict[str, Any]:
        menu = await self.menu_crud.menus.find_one({"menu_id": menu_id}, deadline=deadline)
        if menu is None:
            raise ReferenceNotFound("menu was not found")
        return menu

    async def create(self, obj_in: FoodCreate, deadline: Optional[Deadline] = None) -> Dict[str, Any]:
        if obj_in.menu_id is not None:
            menu = await self._require_menu(obj_in.menu_id, deadline)
        elif obj_in.category is not None:
            menu = await self.menu_crud.get_or_create_for_category(obj_in.category, deadline=deadline)
        else:
            raise ValidationError("either menu_id or category is required")

        document = obj_in.model_dump(exclude={"category"})
        document["menu_id"] = menu["menu_id"]
        document["price"] = to_fixed(obj_in.price, 2)
        return await self.foods.insert_one(document, deadline=deadline)

    async def update(self, food_id: str, obj_in: FoodUpdate, deadline: Optional[Deadline] = None) -> Dict[str, Any]:
        fields = obj_in.to_update()
        if "menu_id" in fields:
            await self._require_menu(fields["menu_id"], deadline)
        if "price" in fields:
            fields["price"] = to_fixed(fields["price"], 2)
        return await self.foods.upsert_by_business_id(food_id, fields, deadline=deadline)

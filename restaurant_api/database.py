import logging

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from restaurant_api.crud.food_crud import CRUDFood
from restaurant_api.crud.invoice_crud import CRUDInvoice
from restaurant_api.crud.menu_crud import CRUDMenu
from restaurant_api.crud.mongo_crud import MongoCRUD
from restaurant_api.crud.order_crud import OrderLifecycle
from restaurant_api.crud.user_crud import CRUDUser
from restaurant_api.utils.config import settings
from restaurant_api.utils.deadline import Deadline

logger = logging.getLogger(__name__)


def create_mongo_database(url: str = None, name: str = None) -> AsyncIOMotorDatabase:
    client = AsyncIOMotorClient(url or settings.MONGODB_URL)
    return client[name or settings.MONGODB_DB]


class AppContext:
    """Repositories and services for one database, owned by the application."""

    def __init__(self, db: AsyncIOMotorDatabase, timeout: float = settings.DB_TIMEOUT_SECONDS):
        self.db = db
        self.users = MongoCRUD(db["user"], "user_id", "user", timeout)
        self.menus = MongoCRUD(db["menu"], "menu_id", "menu", timeout)
        self.foods = MongoCRUD(db["food"], "food_id", "food", timeout)
        self.tables = MongoCRUD(db["table"], "table_id", "table", timeout)
        self.orders = MongoCRUD(db["order"], "order_id", "order", timeout)
        self.order_items = MongoCRUD(db["orderItem"], "order_item_id", "order item", timeout)
        self.invoices = MongoCRUD(db["invoice"], "invoice_id", "invoice", timeout)

        self.user_crud = CRUDUser(self.users)
        self.menu_crud = CRUDMenu(self.menus)
        self.food_crud = CRUDFood(self.foods, self.menu_crud)
        self.order_lifecycle = OrderLifecycle(self.orders, self.order_items, self.tables)
        self.invoice_crud = CRUDInvoice(self.invoices, self.order_lifecycle)

    async def init_mongo(self) -> None:
        await self.users.collection.create_index("email", unique=True)
        await self.users.collection.create_index("phone", unique=True)
        for repo in (self.users, self.menus, self.foods, self.tables, self.orders, self.order_items, self.invoices):
            await repo.collection.create_index(repo.id_field, unique=True)
        await self.order_items.collection.create_index("order_id")
        logger.info("mongo indexes ensured on %s", self.db.name)


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_deadline() -> Deadline:
    return Deadline(settings.DB_TIMEOUT_SECONDS)

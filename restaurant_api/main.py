import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from motor.motor_asyncio import AsyncIOMotorDatabase

from restaurant_api.database import AppContext, create_mongo_database
from restaurant_api.routers.food_router import router as food_router
from restaurant_api.routers.invoice_router import router as invoice_router
from restaurant_api.routers.menu_router import router as menu_router
from restaurant_api.routers.order_item_router import router as order_item_router
from restaurant_api.routers.order_router import router as order_router
from restaurant_api.routers.table_router import router as table_router
from restaurant_api.routers.user_routers import router as user_router
from restaurant_api.utils.config import settings
from restaurant_api.utils.middleware.authentication_middleware import AuthorizationMiddleware
from restaurant_api.utils.middleware.logger import LoggingMiddleware, setup_logging

logger = logging.getLogger(__name__)


def create_app(database: AsyncIOMotorDatabase = None) -> FastAPI:
    setup_logging(settings.LOG_LEVEL)

    if database is None:
        database = create_mongo_database()

    app = FastAPI(title="Restaurant Management API")
    app.state.context = AppContext(database, timeout=settings.DB_TIMEOUT_SECONDS)

    # Starlette runs the last added middleware first: CORS -> logging -> auth -> routes
    app.add_middleware(AuthorizationMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    async def startup_event():
        await app.state.context.init_mongo()
        logger.info("restaurant api started")

    app.include_router(user_router)
    app.include_router(menu_router)
    app.include_router(food_router)
    app.include_router(table_router)
    app.include_router(order_router)
    app.include_router(order_item_router)
    app.include_router(invoice_router)
    return app

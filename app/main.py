import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from app.config import Settings, get_settings
from app.core.exception_handlers import setup_exception_handlers
from app.core.logging import setup_logging
from app.database import create_schema
from app.routers import (
    channels_router,
    dashboard_router,
    health_router,
    inventory_router,
    movements_router,
    products_router,
)
from app.services.context import InventoryContext, build_context

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, *, context: Optional[InventoryContext] = None) -> FastAPI:
    settings = settings or get_settings()
    context = context or build_context(settings)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        logger.info("%s starting (%s)", settings.APP_NAME, settings.ENVIRONMENT)
        try:
            yield
        finally:
            context.close()

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.context = context
    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(products_router)
    app.include_router(channels_router)
    app.include_router(inventory_router)
    app.include_router(movements_router)
    app.include_router(dashboard_router)
    return app


setup_logging()
create_schema()
app = create_app()


__all__ = ["app", "create_app"]

from app.routers.channels import router as channels_router
from app.routers.dashboard import router as dashboard_router
from app.routers.health import router as health_router
from app.routers.inventory import router as inventory_router
from app.routers.movements import router as movements_router
from app.routers.products import router as products_router

__all__ = [
    "channels_router",
    "dashboard_router",
    "health_router",
    "inventory_router",
    "movements_router",
    "products_router",
]

from fastapi import APIRouter, Depends

from app.database.store import CollectionStore
from app.dependencies import get_context, get_store
from app.schemas.dashboard import DashboardStatsResponse, LowStockResponse
from app.services.context import InventoryContext
from app.services.dashboard_service import dashboard_low_stock, dashboard_stats

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse)
def get_dashboard_stats(
    store: CollectionStore = Depends(get_store),
    context: InventoryContext = Depends(get_context),
):
    return DashboardStatsResponse.model_validate(dashboard_stats(store, context.settings))


@router.get("/low-stock", response_model=LowStockResponse)
def get_low_stock(store: CollectionStore = Depends(get_store)):
    items = dashboard_low_stock(store)
    return LowStockResponse.model_validate({"items": items, "total": len(items)})

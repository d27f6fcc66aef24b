from app.services.context import InventoryContext, build_context
from app.services.dashboard_service import dashboard_low_stock, dashboard_stats
from app.services.ledger_service import list_movements, record_movement
from app.services.reconciler_service import push_stock, sync_active_channels, sync_channel

__all__ = [
    "InventoryContext",
    "build_context",
    "dashboard_low_stock",
    "dashboard_stats",
    "list_movements",
    "push_stock",
    "record_movement",
    "sync_active_channels",
    "sync_channel",
]

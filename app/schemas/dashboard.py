from typing import List, Optional

from app.schemas.base import CamelModel, UtcDatetime
from app.schemas.movement import MovementRead


class TopProduct(CamelModel):
    product_id: str
    sku: str
    name: str
    quantity: int
    value: float
    stock_status: str


class ChannelStat(CamelModel):
    channel_id: str
    name: str
    type: str
    is_active: bool
    sync_status: str
    last_synced_at: Optional[UtcDatetime] = None
    product_count: int
    total_quantity: int
    total_available: int


class DashboardStatsResponse(CamelModel):
    success: bool = True
    total_products: int
    total_value: float
    low_stock_count: int
    out_of_stock_count: int
    top_products: List[TopProduct]
    channel_stats: List[ChannelStat]
    recent_movements: List[MovementRead]


class ChannelQuantity(CamelModel):
    channel_id: str
    quantity: int


class LowStockEntry(CamelModel):
    product_id: str
    sku: str
    name: str
    category: str
    total_quantity: int
    reorder_point: int
    stock_status: str
    suggested_reorder: int
    channels: List[ChannelQuantity]


class LowStockResponse(CamelModel):
    success: bool = True
    items: List[LowStockEntry]
    total: int

from typing import List, Optional

from app.schemas.base import CamelModel, UtcDatetime
from app.schemas.channel import ChannelRead


class InventoryItemRead(CamelModel):
    id: str
    product_id: str
    channel_id: str
    quantity: int
    reserved: int
    available: int
    last_synced_at: Optional[UtcDatetime] = None
    updated_at: UtcDatetime


class InventoryListResponse(CamelModel):
    success: bool = True
    items: List[InventoryItemRead]
    total: int


class SyncInventoryRequest(CamelModel):
    channel_id: Optional[str] = None
    product_ids: Optional[List[str]] = None


class SyncErrorRead(CamelModel):
    product_id: str
    error: str


class SyncInventoryResponse(CamelModel):
    success: bool
    synced_count: int = 0
    errors: List[SyncErrorRead]
    last_synced_at: Optional[UtcDatetime] = None
    channel: Optional[ChannelRead] = None

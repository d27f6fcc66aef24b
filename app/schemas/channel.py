from typing import List, Optional

from app.schemas.base import CamelModel, UtcDatetime


class ChannelCreate(CamelModel):
    name: str
    type: str
    api_key: Optional[str] = None
    api_secret: Optional[str] = None
    store_url: Optional[str] = None


class ChannelUpdate(CamelModel):
    name: Optional[str] = None
    is_active: Optional[bool] = None
    api_key: Optional[str] = None
    api_secret: Optional[str] = None
    store_url: Optional[str] = None


class ChannelRead(CamelModel):
    """Credentials stay server-side; only the store URL is echoed."""

    id: str
    name: str
    type: str
    store_url: Optional[str] = None
    is_active: bool
    last_synced_at: Optional[UtcDatetime] = None
    sync_status: str
    sync_error: Optional[str] = None
    created_at: UtcDatetime


class ChannelResponse(CamelModel):
    success: bool = True
    channel: ChannelRead


class ChannelListResponse(CamelModel):
    success: bool = True
    channels: List[ChannelRead]
    total: int


class PushStockRequest(CamelModel):
    product_id: str


class PushStockResponse(CamelModel):
    success: bool
    product_id: str
    channel_id: str
    quantity: int

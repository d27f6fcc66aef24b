from typing import Optional

from fastapi import APIRouter, Depends

from app.database.store import CollectionStore
from app.dependencies import get_context, get_store
from app.schemas.base import DeleteResponse
from app.schemas.channel import (
    ChannelCreate,
    ChannelListResponse,
    ChannelRead,
    ChannelResponse,
    ChannelUpdate,
    PushStockRequest,
    PushStockResponse,
)
from app.services import channel_service
from app.services.context import InventoryContext
from app.services.reconciler_service import push_stock

router = APIRouter(prefix="/channels", tags=["Channels"])


@router.get("", response_model=ChannelListResponse)
def list_channels(
    is_active: Optional[bool] = None,
    type: Optional[str] = None,
    store: CollectionStore = Depends(get_store),
):
    channels = channel_service.list_channels(store, is_active=is_active, channel_type=type)
    return ChannelListResponse(
        channels=[ChannelRead.model_validate(channel) for channel in channels],
        total=len(channels),
    )


@router.post("", response_model=ChannelResponse, status_code=201)
def create_channel(
    payload: ChannelCreate,
    store: CollectionStore = Depends(get_store),
    context: InventoryContext = Depends(get_context),
):
    channel = channel_service.create_channel(
        store,
        context,
        name=payload.name,
        channel_type=payload.type,
        api_key=payload.api_key,
        api_secret=payload.api_secret,
        store_url=payload.store_url,
    )
    return ChannelResponse(channel=ChannelRead.model_validate(channel))


@router.get("/{channel_id}", response_model=ChannelResponse)
def get_channel(channel_id: str, store: CollectionStore = Depends(get_store)):
    channel = channel_service.get_channel(store, channel_id)
    return ChannelResponse(channel=ChannelRead.model_validate(channel))


@router.patch("/{channel_id}", response_model=ChannelResponse)
def update_channel(
    channel_id: str,
    payload: ChannelUpdate,
    store: CollectionStore = Depends(get_store),
    context: InventoryContext = Depends(get_context),
):
    changes = payload.model_dump(exclude_unset=True)
    channel = channel_service.update_channel(store, context, channel_id, changes)
    return ChannelResponse(channel=ChannelRead.model_validate(channel))


@router.delete("/{channel_id}", response_model=DeleteResponse)
def delete_channel(channel_id: str, store: CollectionStore = Depends(get_store)):
    channel_service.delete_channel(store, channel_id)
    return DeleteResponse(id=channel_id)


@router.post("/{channel_id}/push-stock", response_model=PushStockResponse)
def push_channel_stock(
    channel_id: str,
    payload: PushStockRequest,
    store: CollectionStore = Depends(get_store),
    context: InventoryContext = Depends(get_context),
):
    outcome = push_stock(store, context, channel_id, payload.product_id)
    return PushStockResponse(
        success=outcome.success,
        product_id=outcome.product_id,
        channel_id=outcome.channel_id,
        quantity=outcome.quantity,
    )

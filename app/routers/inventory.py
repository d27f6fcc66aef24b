import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.core.dates import utc_now
from app.core.exceptions import InventoryError
from app.database.store import CollectionStore
from app.dependencies import get_context, get_store
from app.schemas.channel import ChannelRead
from app.schemas.inventory import (
    InventoryItemRead,
    InventoryListResponse,
    SyncErrorRead,
    SyncInventoryRequest,
    SyncInventoryResponse,
)
from app.services.context import InventoryContext
from app.services.inventory_service import list_inventory
from app.services.reconciler_service import sync_channel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/inventory", tags=["Inventory"])


@router.get("", response_model=InventoryListResponse)
def get_inventory(
    product_id: Optional[str] = None,
    channel_id: Optional[str] = None,
    store: CollectionStore = Depends(get_store),
):
    items = list_inventory(store, product_id=product_id, channel_id=channel_id)
    return InventoryListResponse(
        items=[InventoryItemRead.model_validate(item) for item in items],
        total=len(items),
    )


def _failure(status_code: int, message: str) -> JSONResponse:
    body = SyncInventoryResponse(
        success=False,
        synced_count=0,
        errors=[SyncErrorRead(product_id="", error=message)],
        last_synced_at=utc_now(),
    )
    return JSONResponse(content=body.model_dump(mode="json", by_alias=True), status_code=status_code)


@router.post("/sync", response_model=SyncInventoryResponse)
def sync_inventory(
    payload: SyncInventoryRequest,
    store: CollectionStore = Depends(get_store),
    context: InventoryContext = Depends(get_context),
):
    try:
        outcome = sync_channel(store, context, payload.channel_id, payload.product_ids)
    except InventoryError as exc:
        return _failure(exc.status_code, exc.message)
    except Exception:
        logger.exception("Sync request failed for channel %s", payload.channel_id)
        return _failure(500, "Sync failed")

    return SyncInventoryResponse(
        success=outcome.success,
        synced_count=outcome.synced_count,
        errors=[SyncErrorRead(product_id=err.product_id, error=err.error) for err in outcome.errors],
        last_synced_at=outcome.last_synced_at,
        channel=ChannelRead.model_validate(outcome.channel) if outcome.channel is not None else None,
    )

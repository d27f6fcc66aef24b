from typing import Optional

from fastapi import APIRouter, Depends

from app.database.store import CollectionStore
from app.dependencies import get_context, get_store
from app.schemas.inventory import InventoryItemRead
from app.schemas.movement import (
    MovementCreate,
    MovementListResponse,
    MovementRead,
    RecordMovementResponse,
)
from app.services.context import InventoryContext
from app.services.ledger_service import list_movements, record_movement

router = APIRouter(prefix="/movements", tags=["Movements"])


@router.get("", response_model=MovementListResponse)
def get_movements(
    product_id: Optional[str] = None,
    channel_id: Optional[str] = None,
    type: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    limit: Optional[int] = None,
    store: CollectionStore = Depends(get_store),
    context: InventoryContext = Depends(get_context),
):
    movements = list_movements(
        store,
        product_id=product_id,
        channel_id=channel_id,
        movement_type=type,
        start_date=start_date,
        end_date=end_date,
        limit=context.settings.MOVEMENT_LIST_LIMIT if limit is None else limit,
    )
    return MovementListResponse(
        movements=[MovementRead.model_validate(movement) for movement in movements],
        total=len(movements),
    )


@router.post("", response_model=RecordMovementResponse, status_code=201)
def create_movement(
    payload: MovementCreate,
    store: CollectionStore = Depends(get_store),
    context: InventoryContext = Depends(get_context),
):
    outcome = record_movement(
        store,
        context,
        product_id=payload.product_id,
        channel_id=payload.channel_id,
        movement_type=payload.type,
        quantity=payload.quantity,
        reason=payload.reason,
        reference=payload.reference,
        created_by=payload.created_by,
    )
    return RecordMovementResponse(
        movement=MovementRead.model_validate(outcome.movement),
        inventory_item=InventoryItemRead.model_validate(outcome.inventory_item),
    )

from typing import List, Optional

from app.schemas.base import CamelModel, UtcDatetime
from app.schemas.inventory import InventoryItemRead


class MovementCreate(CamelModel):
    product_id: Optional[str] = None
    channel_id: Optional[str] = None
    type: Optional[str] = None
    quantity: Optional[int] = None
    reason: Optional[str] = None
    reference: Optional[str] = None
    created_by: Optional[str] = None


class MovementRead(CamelModel):
    id: str
    product_id: str
    channel_id: str
    type: str
    quantity: int
    previous_quantity: int
    new_quantity: int
    reason: Optional[str] = None
    reference: Optional[str] = None
    created_at: UtcDatetime
    created_by: str


class RecordMovementResponse(CamelModel):
    success: bool = True
    movement: MovementRead
    inventory_item: InventoryItemRead


class MovementListResponse(CamelModel):
    success: bool = True
    movements: List[MovementRead]
    total: int

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from app.core.constants import (
    ID_PREFIX_MOVEMENT,
    MOVEMENT_CORRECTION,
    MOVEMENT_SALE,
    MOVEMENT_TRANSFER,
    MOVEMENT_TYPE_ALIASES,
)
from app.core.dates import normalize_datetime, utc_now
from app.core.exceptions import NotFoundError, ValidationFailedError
from app.core.identifiers import new_id
from app.database.store import CollectionStore
from app.models.inventory import InventoryItem
from app.models.movement import StockMovement
from app.services.context import InventoryContext
from app.services.inventory_service import apply_quantity, find_or_create_item

logger = logging.getLogger(__name__)

# transfer only debits the source record; nothing credits a destination
_DECREMENTING_TYPES = frozenset({MOVEMENT_SALE, MOVEMENT_CORRECTION, MOVEMENT_TRANSFER})


@dataclass
class MovementOutcome:
    movement: StockMovement
    inventory_item: InventoryItem


def normalize_movement_type(value) -> Optional[str]:
    if value is None:
        return None
    key = str(value).strip().lower().replace("-", "_").replace(" ", "_")
    return MOVEMENT_TYPE_ALIASES.get(key)


def signed_delta(movement_type: str, quantity: int) -> int:
    magnitude = abs(int(quantity))
    if movement_type in _DECREMENTING_TYPES:
        return -magnitude
    return magnitude


def next_quantity(previous_quantity: int, movement_type: str, quantity: int) -> int:
    return max(0, previous_quantity + signed_delta(movement_type, quantity))


def validate_movement(product_id, channel_id, movement_type, quantity):
    missing = []
    if not (product_id or "").strip():
        missing.append("productId")
    if not (channel_id or "").strip():
        missing.append("channelId")
    if movement_type is None or not str(movement_type).strip():
        missing.append("type")
    if quantity is None:
        missing.append("quantity")
    if missing:
        raise ValidationFailedError(
            "Missing required fields: {}".format(", ".join(missing)),
            details={"missing": missing},
        )

    canonical_type = normalize_movement_type(movement_type)
    if canonical_type is None:
        raise ValidationFailedError("Unknown movement type: {}".format(movement_type))
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationFailedError("quantity must be an integer")
    return canonical_type, abs(quantity)


def record_movement(
    store: CollectionStore,
    context: InventoryContext,
    *,
    product_id: str,
    channel_id: str,
    movement_type: str,
    quantity: int,
    reason: Optional[str] = None,
    reference: Optional[str] = None,
    created_by: Optional[str] = None,
) -> MovementOutcome:
    canonical_type, magnitude = validate_movement(product_id, channel_id, movement_type, quantity)
    if store.get_product(product_id) is None:
        raise NotFoundError("Product not found: {}".format(product_id))
    if store.get_channel(channel_id) is None:
        raise NotFoundError("Channel not found: {}".format(channel_id))

    with context.inventory_locks.hold((product_id, channel_id)):
        # close any read transaction so the record below reflects the latest commit
        store.commit()
        now = utc_now()
        try:
            item, _created = find_or_create_item(store, product_id, channel_id, now=now)
            previous_quantity = item.quantity or 0
            new_quantity = next_quantity(previous_quantity, canonical_type, magnitude)
            apply_quantity(item, new_quantity, now=now)

            movement = StockMovement(
                id=new_id(ID_PREFIX_MOVEMENT),
                product_id=product_id,
                channel_id=channel_id,
                type=canonical_type,
                quantity=magnitude,
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
                reason=reason,
                reference=reference,
                created_at=now,
                created_by=created_by or context.settings.MOVEMENT_CREATED_BY,
            )
            store.add(movement)
            store.commit()
        except SQLAlchemyError:
            store.rollback()
            raise

    logger.info(
        "Recorded %s of %s for %s/%s: %s -> %s",
        canonical_type,
        magnitude,
        product_id,
        channel_id,
        previous_quantity,
        new_quantity,
        extra={"product_id": product_id, "channel_id": channel_id},
    )
    return MovementOutcome(movement=movement, inventory_item=item)


def list_movements(
    store: CollectionStore,
    *,
    product_id=None,
    channel_id=None,
    movement_type=None,
    start_date=None,
    end_date=None,
    limit: int = 100,
) -> list[StockMovement]:
    canonical_type = None
    if movement_type:
        canonical_type = normalize_movement_type(movement_type)
        if canonical_type is None:
            raise ValidationFailedError("Unknown movement type: {}".format(movement_type))

    start_at = normalize_datetime(start_date)
    end_at = normalize_datetime(end_date, end_of_day=True)
    if start_date and start_at is None:
        raise ValidationFailedError("Invalid startDate: {}".format(start_date))
    if end_date and end_at is None:
        raise ValidationFailedError("Invalid endDate: {}".format(end_date))

    movements = store.list_movements(
        product_id=product_id,
        channel_id=channel_id,
        movement_type=canonical_type,
    )
    results = []
    if limit <= 0:
        return results
    for movement in movements:
        created_at = normalize_datetime(movement.created_at)
        if start_at and created_at < start_at:
            continue
        if end_at and created_at > end_at:
            continue
        results.append(movement)
        if len(results) >= limit:
            break
    return results


__all__ = [
    "MovementOutcome",
    "list_movements",
    "next_quantity",
    "normalize_movement_type",
    "record_movement",
    "signed_delta",
    "validate_movement",
]

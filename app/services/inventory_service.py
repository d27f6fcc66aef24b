import logging

from sqlalchemy.exc import IntegrityError

from app.core.constants import ID_PREFIX_INVENTORY
from app.core.identifiers import new_id
from app.core.inventory_calculator import calculate_available
from app.database.store import CollectionStore
from app.models.inventory import InventoryItem

logger = logging.getLogger(__name__)


def find_or_create_item(store: CollectionStore, product_id: str, channel_id: str, *, now):
    """Return the single record for the pair, creating an empty one if needed.

    Callers hold the pair lock; the unique constraint still guards against a
    writer in another process racing the insert.
    """
    item = store.find_inventory_item(product_id, channel_id)
    if item is not None:
        return item, False

    item = InventoryItem(
        id=new_id(ID_PREFIX_INVENTORY),
        product_id=product_id,
        channel_id=channel_id,
        quantity=0,
        reserved=0,
        available=0,
        updated_at=now,
    )
    store.add(item)
    try:
        store.flush()
    except IntegrityError:
        store.rollback()
        item = store.find_inventory_item(product_id, channel_id)
        if item is None:
            raise
        return item, False
    logger.debug(
        "Created inventory record for %s/%s",
        product_id,
        channel_id,
        extra={"product_id": product_id, "channel_id": channel_id},
    )
    return item, True


def apply_quantity(item: InventoryItem, quantity: int, *, now, synced: bool = False) -> InventoryItem:
    item.quantity = max(0, int(quantity))
    item.reserved = max(0, int(item.reserved or 0))
    item.available = calculate_available(item.quantity, item.reserved)
    item.updated_at = now
    if synced:
        item.last_synced_at = now
    return item


def list_inventory(store: CollectionStore, *, product_id=None, channel_id=None):
    return store.list_inventory(product_id=product_id, channel_id=channel_id)


__all__ = ["apply_quantity", "find_or_create_item", "list_inventory"]

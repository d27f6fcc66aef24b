import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.constants import ID_PREFIX_PRODUCT, INITIAL_STOCK_REASON, MOVEMENT_REPLENISHMENT
from app.core.dates import utc_now
from app.core.exceptions import DuplicateKeyError, NotFoundError, ValidationFailedError
from app.core.identifiers import new_id
from app.database.store import CollectionStore, normalize_key
from app.models.product import Product
from app.services.context import InventoryContext
from app.services.ledger_service import record_movement

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("sku", "name", "description", "category")
_UPDATABLE_FIELDS = _TEXT_FIELDS + ("price", "cost", "reorder_point", "reorder_quantity")


@dataclass
class InitialStock:
    channel_id: str
    quantity: int


@dataclass
class ProductDraft:
    sku: str
    name: str
    category: str
    description: str = ""
    price: float = 0.0
    cost: float = 0.0
    reorder_point: Optional[int] = None
    reorder_quantity: Optional[int] = None
    initial_stock: list[InitialStock] = field(default_factory=list)


def _check_money(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationFailedError("{} must be a number".format(name))
    if value < 0:
        raise ValidationFailedError("{} must be >= 0".format(name))
    return float(value)


def _check_int(name: str, value, *, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationFailedError("{} must be an integer".format(name))
    if value < minimum:
        raise ValidationFailedError("{} must be >= {}".format(name, minimum))
    return value


def _required_text(values: dict) -> None:
    missing = [name for name in ("sku", "name", "category") if not (values.get(name) or "").strip()]
    if missing:
        raise ValidationFailedError(
            "Missing required fields: {}".format(", ".join(missing)),
            details={"missing": missing},
        )


def list_products(store: CollectionStore, *, category=None, search=None) -> list[Product]:
    return store.list_products(category=category, search=search)


def get_product(store: CollectionStore, product_id: str) -> Product:
    product = store.get_product(product_id)
    if product is None:
        raise NotFoundError("Product not found")
    return product


def create_product(store: CollectionStore, context: InventoryContext, draft: ProductDraft) -> Product:
    settings = context.settings
    _required_text({"sku": draft.sku, "name": draft.name, "category": draft.category})
    reorder_point = draft.reorder_point
    if reorder_point is None:
        reorder_point = settings.DEFAULT_REORDER_POINT
    reorder_quantity = draft.reorder_quantity
    if reorder_quantity is None:
        reorder_quantity = settings.DEFAULT_REORDER_QUANTITY

    sku = draft.sku.strip()
    if store.find_product_by_sku(sku) is not None:
        raise DuplicateKeyError("SKU already exists", details={"sku": sku})

    now = utc_now()
    product = Product(
        id=new_id(ID_PREFIX_PRODUCT),
        sku=sku,
        sku_key=normalize_key(sku),
        name=draft.name.strip(),
        description=(draft.description or "").strip(),
        category=draft.category.strip(),
        price=_check_money("price", draft.price),
        cost=_check_money("cost", draft.cost),
        reorder_point=_check_int("reorderPoint", reorder_point, minimum=0),
        reorder_quantity=_check_int("reorderQuantity", reorder_quantity, minimum=1),
        created_at=now,
        updated_at=now,
    )
    store.add(product)
    try:
        store.commit()
    except IntegrityError:
        store.rollback()
        raise DuplicateKeyError("SKU already exists", details={"sku": sku}) from None

    logger.info("Created product %s (%s)", product.id, sku, extra={"product_id": product.id})
    _apply_initial_stock(store, context, product, draft.initial_stock)
    return product


def _apply_initial_stock(
    store: CollectionStore,
    context: InventoryContext,
    product: Product,
    entries: Iterable[InitialStock],
) -> None:
    for entry in entries or ():
        if not entry.quantity or entry.quantity <= 0:
            continue
        if store.get_channel(entry.channel_id) is None:
            logger.warning(
                "Skipping initial stock for unknown channel %s",
                entry.channel_id,
                extra={"product_id": product.id, "channel_id": entry.channel_id},
            )
            continue
        record_movement(
            store,
            context,
            product_id=product.id,
            channel_id=entry.channel_id,
            movement_type=MOVEMENT_REPLENISHMENT,
            quantity=entry.quantity,
            reason=INITIAL_STOCK_REASON,
        )


def update_product(store: CollectionStore, product_id: str, changes: dict) -> Product:
    product = get_product(store, product_id)
    unknown = sorted(set(changes) - set(_UPDATABLE_FIELDS))
    if unknown:
        raise ValidationFailedError("Unknown fields: {}".format(", ".join(unknown)))

    for name in ("sku", "name", "category"):
        if name in changes and not (changes[name] or "").strip():
            raise ValidationFailedError("{} cannot be empty".format(name))

    if "sku" in changes:
        sku = changes["sku"].strip()
        if normalize_key(sku) != product.sku_key:
            existing = store.find_product_by_sku(sku)
            if existing is not None and existing.id != product.id:
                raise DuplicateKeyError("SKU already exists", details={"sku": sku})
        product.sku = sku
        product.sku_key = normalize_key(sku)
    for name in ("name", "category"):
        if name in changes:
            setattr(product, name, changes[name].strip())
    if "description" in changes:
        product.description = (changes["description"] or "").strip()
    for name in ("price", "cost"):
        if name in changes:
            setattr(product, name, _check_money(name, changes[name]))
    if "reorder_point" in changes:
        product.reorder_point = _check_int("reorderPoint", changes["reorder_point"], minimum=0)
    if "reorder_quantity" in changes:
        product.reorder_quantity = _check_int("reorderQuantity", changes["reorder_quantity"], minimum=1)

    product.updated_at = utc_now()
    try:
        store.commit()
    except IntegrityError:
        store.rollback()
        raise DuplicateKeyError("SKU already exists") from None
    return product


def delete_product(store: CollectionStore, product_id: str) -> None:
    product = get_product(store, product_id)
    try:
        inventory_rows = store.delete_inventory_for_product(product_id)
        movement_rows = store.delete_movements_for_product(product_id)
        store.delete(product)
        store.commit()
    except SQLAlchemyError:
        store.rollback()
        raise
    logger.info(
        "Deleted product %s with %s inventory records and %s movements",
        product_id,
        inventory_rows,
        movement_rows,
        extra={"product_id": product_id},
    )


__all__ = [
    "InitialStock",
    "ProductDraft",
    "create_product",
    "delete_product",
    "get_product",
    "list_products",
    "update_product",
]

from typing import Iterable, Optional, Sequence, cast

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from app.models.channel import SalesChannel
from app.models.inventory import InventoryItem
from app.models.movement import StockMovement
from app.models.product import Product


def normalize_key(value: str) -> str:
    return (value or "").strip().lower()


class CollectionStore:
    """Persistence boundary over one session.

    The whole-collection ``get_*``/``save_*`` pairs replace a collection in
    one go; the record-level helpers let concurrent writers touch only the
    rows they hold a lock on.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    # ------------------------------------------------------------------
    # Whole-collection contract
    # ------------------------------------------------------------------
    def _get_all(self, model, order_by) -> list:
        rows = self.session.execute(select(model).order_by(order_by)).scalars().all()
        return list(rows)

    def _replace_all(self, model, records: Iterable) -> None:
        records = list(records)
        keep_ids = {record.id for record in records}
        existing_ids = set(self.session.execute(select(model.id)).scalars())
        stale_ids = existing_ids - keep_ids
        if stale_ids:
            self.session.execute(delete(model).where(model.id.in_(stale_ids)))
        for record in records:
            self.session.merge(record)
        self.session.commit()

    def get_products(self) -> list[Product]:
        return self._get_all(Product, Product.created_at)

    def save_products(self, products: Iterable[Product]) -> None:
        self._replace_all(Product, products)

    def get_inventory(self) -> list[InventoryItem]:
        return self._get_all(InventoryItem, InventoryItem.updated_at)

    def save_inventory(self, inventory: Iterable[InventoryItem]) -> None:
        self._replace_all(InventoryItem, inventory)

    def get_channels(self) -> list[SalesChannel]:
        return self._get_all(SalesChannel, SalesChannel.created_at)

    def save_channels(self, channels: Iterable[SalesChannel]) -> None:
        self._replace_all(SalesChannel, channels)

    def get_movements(self) -> list[StockMovement]:
        return self._get_all(StockMovement, StockMovement.created_at)

    def save_movements(self, movements: Iterable[StockMovement]) -> None:
        self._replace_all(StockMovement, movements)

    # ------------------------------------------------------------------
    # Record-level access
    # ------------------------------------------------------------------
    def get_product(self, product_id: str) -> Optional[Product]:
        return self.session.get(Product, product_id)

    def find_product_by_sku(self, sku: str) -> Optional[Product]:
        stmt = select(Product).where(Product.sku_key == normalize_key(sku)).limit(1)
        return self.session.execute(stmt).scalars().first()

    def list_products(self, *, category=None, search=None) -> list[Product]:
        stmt = select(Product)
        if category:
            stmt = stmt.where(Product.category == category)
        if search:
            pattern = "%{}%".format(search.strip().lower())
            stmt = stmt.where(
                func.lower(Product.name).like(pattern)
                | Product.sku_key.like(pattern)
                | func.lower(Product.description).like(pattern)
            )
        stmt = stmt.order_by(Product.created_at)
        return list(self.session.execute(stmt).scalars().all())

    def existing_product_ids(self, product_ids: Sequence[str]) -> set[str]:
        if not product_ids:
            return set()
        stmt = select(Product.id).where(Product.id.in_(list(product_ids)))
        return set(self.session.execute(stmt).scalars())

    def all_product_ids(self) -> list[str]:
        stmt = select(Product.id).order_by(Product.created_at)
        return list(self.session.execute(stmt).scalars())

    def get_channel(self, channel_id: str) -> Optional[SalesChannel]:
        return self.session.get(SalesChannel, channel_id)

    def refresh_channel(self, channel_id: str) -> Optional[SalesChannel]:
        channel = self.session.get(SalesChannel, channel_id, populate_existing=True)
        return channel

    def find_channel_by_name(self, name: str) -> Optional[SalesChannel]:
        stmt = select(SalesChannel).where(SalesChannel.name_key == normalize_key(name)).limit(1)
        return self.session.execute(stmt).scalars().first()

    def list_channels(self, *, is_active=None, channel_type=None) -> list[SalesChannel]:
        stmt = select(SalesChannel)
        if is_active is not None:
            stmt = stmt.where(SalesChannel.is_active == is_active)
        if channel_type:
            stmt = stmt.where(SalesChannel.type == channel_type)
        stmt = stmt.order_by(SalesChannel.created_at.desc())
        return list(self.session.execute(stmt).scalars().all())

    def find_inventory_item(self, product_id: str, channel_id: str) -> Optional[InventoryItem]:
        stmt = (
            select(InventoryItem)
            .where(
                InventoryItem.product_id == product_id,
                InventoryItem.channel_id == channel_id,
            )
            .limit(1)
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalars().first()

    def list_inventory(self, *, product_id=None, channel_id=None) -> list[InventoryItem]:
        stmt = select(InventoryItem)
        if product_id:
            stmt = stmt.where(InventoryItem.product_id == product_id)
        if channel_id:
            stmt = stmt.where(InventoryItem.channel_id == channel_id)
        stmt = stmt.order_by(InventoryItem.product_id, InventoryItem.channel_id)
        return list(self.session.execute(stmt).scalars().all())

    def list_movements(self, *, product_id=None, channel_id=None, movement_type=None) -> list[StockMovement]:
        stmt = select(StockMovement)
        if product_id:
            stmt = stmt.where(StockMovement.product_id == product_id)
        if channel_id:
            stmt = stmt.where(StockMovement.channel_id == channel_id)
        if movement_type:
            stmt = stmt.where(StockMovement.type == movement_type)
        stmt = stmt.order_by(StockMovement.created_at.desc(), StockMovement.id.desc())
        history = self.session.execute(stmt).scalars().all()
        return cast(list[StockMovement], list(history))

    def delete_inventory_for_product(self, product_id: str) -> int:
        result = self.session.execute(delete(InventoryItem).where(InventoryItem.product_id == product_id))
        return result.rowcount or 0

    def delete_inventory_for_channel(self, channel_id: str) -> int:
        result = self.session.execute(delete(InventoryItem).where(InventoryItem.channel_id == channel_id))
        return result.rowcount or 0

    def delete_movements_for_product(self, product_id: str) -> int:
        result = self.session.execute(delete(StockMovement).where(StockMovement.product_id == product_id))
        return result.rowcount or 0

    def add(self, record) -> None:
        self.session.add(record)

    def delete(self, record) -> None:
        self.session.delete(record)

    def flush(self) -> None:
        self.session.flush()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


__all__ = ["CollectionStore", "normalize_key"]

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint

from app.database.base import Base


class InventoryItem(Base):
    __tablename__ = "inventory_items"

    id = Column(String(64), primary_key=True)

    product_id = Column(String(64), ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    channel_id = Column(String(64), ForeignKey("sales_channels.id", ondelete="CASCADE"), nullable=False)

    quantity = Column(Integer, nullable=False, default=0)
    reserved = Column(Integer, nullable=False, default=0)
    available = Column(Integer, nullable=False, default=0)

    last_synced_at = Column(DateTime(timezone=True))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint("product_id", "channel_id", name="uq_inventory_product_channel"),
        Index("idx_inventory_channel", "channel_id"),
    )


__all__ = ["InventoryItem"]

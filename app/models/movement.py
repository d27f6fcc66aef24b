from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String

from app.database.base import Base


class StockMovement(Base):
    __tablename__ = "stock_movements"

    id = Column(String(64), primary_key=True)

    product_id = Column(String(64), ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    # no FK: movements keep their channel reference after the channel is deleted
    channel_id = Column(String(64), nullable=False)

    type = Column(String(20), nullable=False)
    quantity = Column(Integer, nullable=False)
    previous_quantity = Column(Integer, nullable=False)
    new_quantity = Column(Integer, nullable=False)

    reason = Column(String)
    reference = Column(String)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    created_by = Column(String(80), nullable=False, default="system")

    __table_args__ = (
        Index("idx_movements_product_channel", "product_id", "channel_id"),
        Index("idx_movements_created_at", "created_at"),
    )


__all__ = ["StockMovement"]

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Index, Integer, String

from app.database.base import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(String(64), primary_key=True)

    sku = Column(String(120), nullable=False)
    sku_key = Column(String(120), nullable=False, unique=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    category = Column(String, nullable=False)

    price = Column(Float, nullable=False, default=0)
    cost = Column(Float, nullable=False, default=0)
    reorder_point = Column(Integer, nullable=False, default=10)
    reorder_quantity = Column(Integer, nullable=False, default=50)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_products_category", "category"),
    )


__all__ = ["Product"]

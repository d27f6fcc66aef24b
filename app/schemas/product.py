from typing import List, Optional

from pydantic import Field

from app.schemas.base import CamelModel, UtcDatetime


class InitialStockEntry(CamelModel):
    channel_id: str
    quantity: int = Field(ge=0)


class ProductCreate(CamelModel):
    sku: str
    name: str
    category: str
    description: Optional[str] = ""
    price: float = Field(default=0.0, ge=0)
    cost: float = Field(default=0.0, ge=0)
    reorder_point: Optional[int] = Field(default=None, ge=0)
    reorder_quantity: Optional[int] = Field(default=None, gt=0)
    initial_stock: List[InitialStockEntry] = Field(default_factory=list)


class ProductUpdate(CamelModel):
    sku: Optional[str] = None
    name: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    cost: Optional[float] = Field(default=None, ge=0)
    reorder_point: Optional[int] = Field(default=None, ge=0)
    reorder_quantity: Optional[int] = Field(default=None, gt=0)


class ProductRead(CamelModel):
    id: str
    sku: str
    name: str
    description: str = ""
    category: str
    price: float
    cost: float
    reorder_point: int
    reorder_quantity: int
    created_at: UtcDatetime
    updated_at: UtcDatetime


class ProductResponse(CamelModel):
    success: bool = True
    product: ProductRead


class ProductListResponse(CamelModel):
    success: bool = True
    products: List[ProductRead]
    total: int

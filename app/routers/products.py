from typing import Optional

from fastapi import APIRouter, Depends

from app.database.store import CollectionStore
from app.dependencies import get_context, get_store
from app.schemas.base import DeleteResponse
from app.schemas.product import (
    ProductCreate,
    ProductListResponse,
    ProductRead,
    ProductResponse,
    ProductUpdate,
)
from app.services import catalog_service
from app.services.catalog_service import InitialStock, ProductDraft
from app.services.context import InventoryContext

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=ProductListResponse)
def list_products(
    category: Optional[str] = None,
    search: Optional[str] = None,
    store: CollectionStore = Depends(get_store),
):
    products = catalog_service.list_products(store, category=category, search=search)
    return ProductListResponse(
        products=[ProductRead.model_validate(product) for product in products],
        total=len(products),
    )


@router.post("", response_model=ProductResponse, status_code=201)
def create_product(
    payload: ProductCreate,
    store: CollectionStore = Depends(get_store),
    context: InventoryContext = Depends(get_context),
):
    draft = ProductDraft(
        sku=payload.sku,
        name=payload.name,
        category=payload.category,
        description=payload.description or "",
        price=payload.price,
        cost=payload.cost,
        reorder_point=payload.reorder_point,
        reorder_quantity=payload.reorder_quantity,
        initial_stock=[
            InitialStock(channel_id=entry.channel_id, quantity=entry.quantity)
            for entry in payload.initial_stock
        ],
    )
    product = catalog_service.create_product(store, context, draft)
    return ProductResponse(product=ProductRead.model_validate(product))


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, store: CollectionStore = Depends(get_store)):
    product = catalog_service.get_product(store, product_id)
    return ProductResponse(product=ProductRead.model_validate(product))


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    store: CollectionStore = Depends(get_store),
):
    changes = payload.model_dump(exclude_unset=True)
    product = catalog_service.update_product(store, product_id, changes)
    return ProductResponse(product=ProductRead.model_validate(product))


@router.delete("/{product_id}", response_model=DeleteResponse)
def delete_product(product_id: str, store: CollectionStore = Depends(get_store)):
    catalog_service.delete_product(store, product_id)
    return DeleteResponse(id=product_id)

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.database.session import get_db
from app.database.store import CollectionStore
from app.services.context import InventoryContext


def get_store(db: Session = Depends(get_db)) -> CollectionStore:
    return CollectionStore(db)


def get_context(request: Request) -> InventoryContext:
    return request.app.state.context


__all__ = ["get_context", "get_db", "get_store"]

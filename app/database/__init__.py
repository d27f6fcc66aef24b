from app.database.base import Base
from app.database.engine import create_schema, engine, make_engine
from app.database.session import SessionLocal, make_session_factory

__all__ = [
    "Base",
    "SessionLocal",
    "create_schema",
    "engine",
    "make_engine",
    "make_session_factory",
]

"""Database module."""

from .database import get_db, init_db, make_engine, make_session_factory, engine, SessionLocal
from .models import Base, Holding

__all__ = [
    "get_db",
    "init_db",
    "make_engine",
    "make_session_factory",
    "engine",
    "SessionLocal",
    "Base",
    "Holding",
]

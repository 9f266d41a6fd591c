"""SQLAlchemy database configuration and session management."""

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from stock_portfolio.config import get_settings

settings = get_settings()


def _connect_args(database_url: str) -> dict:
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}  # Needed for SQLite
    return {}


def make_engine(database_url: str) -> Engine:
    """Create an engine for a database URL."""
    return create_engine(
        database_url,
        connect_args=_connect_args(database_url),
        echo=False,  # Set to True for SQL debugging
    )


engine = make_engine(settings.database_url)


def make_session_factory(bind: Engine) -> sessionmaker:
    """Build a session factory bound to an engine."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=bind,
        expire_on_commit=False,  # Allow accessing attributes after commit/close
    )


SessionLocal = make_session_factory(engine)


@contextmanager
def get_db(session_factory: Optional[sessionmaker] = None) -> Generator[Session, None, None]:
    """Context manager for database sessions.

    Usage:
        with get_db() as db:
            db.query(Holding).all()
    """
    db = (session_factory or SessionLocal)()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(bind: Optional[Engine] = None) -> None:
    """Initialize database tables."""
    from .models import Base

    Base.metadata.create_all(bind=bind or engine)

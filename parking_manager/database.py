# parking_manager/database.py
"""
Database connection, session factory and table creation.
SQLite by default (single file next to the app); any SQLAlchemy URL works.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from parking_manager.config import settings


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # the session is used from the event loop thread and the threadpool
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_size": 10, "max_overflow": 20}


engine = create_engine(settings.DATABASE_URL, echo=False, **_engine_kwargs(settings.DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def create_tables(bind=None):
    """Create every table. Safe to call more than once."""
    from parking_manager.models.stored_document import StoredDocument   # noqa

    Base.metadata.create_all(bind=bind or engine)

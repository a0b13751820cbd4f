# File: chunkscribe/core/database/connection.py

from typing import Optional
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from chunkscribe.core.config.settings import settings
from .base import Base


def build_engine(url: str):
    """
    Creates an engine for the job working set.
    An in-memory SQLite URL gets a StaticPool so every session sees the same database.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=False, **kwargs)

    return create_engine(url, echo=False, pool_pre_ping=True)


def build_session_factory(url: Optional[str] = None) -> sessionmaker:
    """
    Fresh engine + sessionmaker with the job tables created.
    With the default in-memory URL each call yields an independent working set.
    """
    engine = build_engine(url or settings.DATABASE_URL)
    init_db(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind):
    """Creates all tables registered on Base. Safe to call repeatedly."""
    # Import models so they are registered on Base
    import chunkscribe.core.jobs.data.sql_models  # noqa: F401

    Base.metadata.create_all(bind=bind)

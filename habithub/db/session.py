# ============================================================================
# FILE: habithub/db/session.py
# ============================================================================
from functools import lru_cache
from typing import Iterator
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from habithub.config import get_settings

@lru_cache
def get_engine() -> Engine:
    """Engine for the store shared by all services"""
    url = get_settings().DATABASE_URL
    if url.startswith("sqlite"):
        engine = create_engine(url, connect_args={"check_same_thread": False}, pool_pre_ping=True)

        # The store never cascades on its own; enforce FK order like a server database
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine
    return create_engine(url, pool_pre_ping=True)

@lru_cache
def get_sessionmaker() -> sessionmaker:
    return sessionmaker(bind=get_engine(), autocommit=False, autoflush=False)

def get_db() -> Iterator[Session]:
    """Request-scoped session dependency"""
    db = get_sessionmaker()()
    try:
        yield db
    finally:
        db.close()

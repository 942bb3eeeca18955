#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

import uuid
from typing import Generator, Optional

from fastapi import Header, HTTPException
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from core.access import AccessContext
from .config import get_config

USER_ID_HEADER = "X-User-Id"


class DatabaseManager:
    """Manages database connections and sessions."""

    def __init__(self, url: Optional[str] = None):
        url = url or get_config().database.url
        self.engine = create_engine(
            url,
            pool_pre_ping=True,  # Verify connections before using
        )
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

    def get_session(self) -> Generator[Session, None, None]:
        """
        Get a database session.

        Uncommitted work is rolled back when the session closes.

        Yields:
            Session: SQLAlchemy database session.
        """
        session = self.SessionLocal()
        try:
            yield session
        finally:
            session.close()


_db_manager: Optional[DatabaseManager] = None


def get_db_manager() -> DatabaseManager:
    """Global database manager, created on first use."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(db: Session = Depends(get_db)):
            ...

    Yields:
        Session: Database session that will be automatically closed.
    """
    yield from get_db_manager().get_session()


def get_access_context(
    x_user_id: Optional[str] = Header(default=None, alias=USER_ID_HEADER)
) -> AccessContext:
    """
    Access context of the caller.

    The upstream auth provider has already authenticated the request and
    forwards the user id in the X-User-Id header.
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail=f"Missing {USER_ID_HEADER} header")
    try:
        user_id = str(uuid.UUID(x_user_id))
    except ValueError:
        raise HTTPException(status_code=401, detail=f"Invalid {USER_ID_HEADER} header")
    return AccessContext.for_user(user_id)

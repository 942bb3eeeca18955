#!/usr/bin/env python3
"""
In-memory SQLite database for repository, service and API tests.

pysqlite's own transaction handling breaks SAVEPOINT; the connect/begin
listeners below hand transaction control back to SQLAlchemy so that
Session.begin_nested() works as it does on PostgreSQL.
"""
from typing import Dict, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from core.compatibility.models import parse_metadata
from database.models import Base, RubricScore, User


def make_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )

    @event.listens_for(engine, "connect")
    def _do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(engine)
    return engine


def make_session_factory(engine=None) -> sessionmaker:
    return sessionmaker(bind=engine or make_engine(), autocommit=False, autoflush=False)


def add_user(session: Session, name: Optional[str], email: Optional[str] = None, **preferences) -> User:
    user = User(full_name=name, email=email or f"{(name or 'anon').lower().replace(' ', '.')}@example.com")
    for key, value in preferences.items():
        setattr(user, key, value)
    session.add(user)
    session.flush()
    return user


def add_scores(session: Session, user: User, category: str, scores: Dict[str, int], choices: Dict[str, str] = None):
    """Insert rubric rows; ``choices`` adds choice metadata values per subcategory."""
    choices = choices or {}
    for subcategory, score in scores.items():
        raw = {"value": choices[subcategory]} if subcategory in choices else None
        session.add(RubricScore(
            user_id=user.id,
            category=category,
            subcategory=subcategory,
            score=score,
            score_metadata=parse_metadata(subcategory, raw).model_dump()
        ))
    session.flush()

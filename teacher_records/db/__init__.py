"""Database configuration and session management utilities."""
from __future__ import annotations

import contextlib
from typing import Iterator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from teacher_records.config import DATABASE_URL, SQLALCHEMY_ECHO


def configure_sqlite(engine: Engine) -> Engine:
    """Let pysqlite honour SAVEPOINT by handing transaction control to SQLAlchemy."""
    if engine.dialect.name != "sqlite":
        return engine

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(connection) -> None:
        connection.exec_driver_sql("BEGIN")

    return engine


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {}


engine = configure_sqlite(
    create_engine(DATABASE_URL, future=True, echo=SQLALCHEMY_ECHO, **_engine_options(DATABASE_URL))
)
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
    future=True,
)

Base = declarative_base()


def init_db(bind: Engine | None = None) -> None:
    """Create database tables for all registered models."""
    from teacher_records.db import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


@contextlib.contextmanager
def get_session() -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


__all__ = [
    "Base",
    "SessionLocal",
    "configure_sqlite",
    "engine",
    "get_session",
    "init_db",
]

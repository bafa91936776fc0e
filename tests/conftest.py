from __future__ import annotations

from typing import Iterator

import httpx
import pytest
from httpx import ASGITransport
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from teacher_records.app import app
from teacher_records.db import configure_sqlite, init_db
from teacher_records.dependencies import get_db


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def session_factory(tmp_path) -> Iterator[sessionmaker]:
    db_path = tmp_path / "teacher_records.db"
    engine = configure_sqlite(
        create_engine(
            f"sqlite:///{db_path}", future=True, connect_args={"check_same_thread": False}
        )
    )
    init_db(engine)
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)

    def override_get_db():
        session = factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield factory
    finally:
        app.dependency_overrides.clear()
        engine.dispose()


@pytest.fixture
def client_factory(session_factory):
    def _client() -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test")

    return _client

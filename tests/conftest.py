# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from hitboard.api.v1.endpoints import counters as counters_endpoints
from hitboard.db.session import Base
from hitboard.db.session import get_db as app_get_session
from hitboard.main import app as fastapi_app
from hitboard.services.admin_guard import AdminGuard
from hitboard.services.counter_service import CounterService

TEST_DB_URL = "sqlite://"
ADMIN_TOKEN = "s3cret-Token"


class FakeClock:
    """Deterministic millisecond clock advancing by ``step`` per reading."""

    def __init__(self, start: int = 1_000, step: int = 1) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> int:
        value = self.now
        self.now += self.step
        return value


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def admin_guard() -> AdminGuard:
    return AdminGuard(ADMIN_TOKEN)


@pytest.fixture()
def service(db_session: Session, clock: FakeClock, admin_guard: AdminGuard) -> CounterService:
    """Counter façade over the test database with a deterministic clock."""
    return CounterService(db_session, guard=admin_guard, clock=clock)


@pytest.fixture()
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    db_session: Session,
    admin_guard: AdminGuard,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[counters_endpoints.get_admin_guard] = lambda: admin_guard
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(counters_endpoints.get_admin_guard, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client

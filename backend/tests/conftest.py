from __future__ import annotations

import os
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

# Ensure the project root (which exposes the ``backend`` package) is on ``sys.path``
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "0")
os.environ.setdefault("APP_TIMEZONE", "America/Sao_Paulo")

from backend.app import clock  # noqa: E402
from backend.app.database import Base, get_db  # noqa: E402
from backend.app.main import app  # noqa: E402
from backend.app.security import access_policy  # noqa: E402

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture(scope="session", autouse=True)
def setup_database() -> Generator[None, None, None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _reset_access_policy() -> Generator[None, None, None]:
    access_policy.reset()
    yield
    access_policy.reset()


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)
    try:
        yield session
    finally:
        session.close()
        transaction.rollback()
        connection.close()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            db_session.expire_all()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def frozen_clock(monkeypatch) -> Callable[[datetime], None]:
    """Pin the application clock; call the returned setter to move it."""

    state = {"now": datetime(2026, 1, 10, 9, 0, tzinfo=clock.app_timezone())}

    def _set(value: datetime) -> None:
        state["now"] = value

    monkeypatch.setattr(clock, "now", lambda: state["now"])
    return _set


@pytest.fixture
def ticking_clock(monkeypatch) -> Callable[[], datetime]:
    """Advance the application clock by one minute on every reading."""

    state = {"now": datetime(2026, 1, 10, 9, 0, tzinfo=clock.app_timezone())}

    def _tick() -> datetime:
        state["now"] = state["now"] + timedelta(minutes=1)
        return state["now"]

    monkeypatch.setattr(clock, "now", _tick)
    return _tick

"""Shared fixtures for the todo-api tests.

Every test gets its own in-memory SQLite database: the store tests work on a
bare engine/session pair, the HTTP tests on a full application built with
create_app().
"""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import Session

from todo_api.core.config import Settings
from todo_api.db.repositories.todos import TodoStore
from todo_api.db.session import build_engine, init_db
from todo_api.main import create_app


def _settings(**overrides) -> Settings:
    values = {
        "ENV": "test",
        "DATABASE_URL": "sqlite://",
        "SITE_ROOT_URL": "http://testserver",
        "LOG_LEVEL": "WARNING",
        "LOG_REQUESTS": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def make_settings():
    """Factory for test settings; keyword arguments override the defaults."""
    return _settings


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at a private in-memory database."""
    return _settings()


@pytest.fixture
def engine(settings: Settings) -> Iterator[Engine]:
    engine = build_engine(settings)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def store() -> TodoStore:
    return TodoStore()


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    """TestClient running the app lifespan (table creation included)."""
    app = create_app(settings)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Collect loguru messages emitted during the test.

    Request this fixture after ``client``: create_app() resets loguru handlers.
    """
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)

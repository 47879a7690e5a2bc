# tests/conftest.py

from pathlib import Path

import pytest

from task_app import create_app
from tasks_api.config import Settings
from tasks_api.db.pool import ConnectionPool
from tasks_api.db.schema import create_schema
from tasks_api.repositories.task_repo import TaskRepository


@pytest.fixture()
def database_url(tmp_path: Path) -> str:
    """A throwaway SQLite database file per test."""
    return f"sqlite:///{tmp_path / 'tasks.sqlite3'}"


@pytest.fixture()
def settings(database_url: str) -> Settings:
    return Settings(database_url=database_url, pool_size=5, pool_timeout=5.0)


@pytest.fixture()
def pool(settings: Settings):
    pool = ConnectionPool.from_url(settings.database_url, **settings.engine_options())
    create_schema(pool)
    yield pool
    pool.close()


@pytest.fixture()
def repo(pool: ConnectionPool) -> TaskRepository:
    return TaskRepository(pool)


@pytest.fixture()
def app(settings: Settings):
    app = create_app(settings)
    app.config["TESTING"] = True
    yield app
    app.extensions["tasks_api"].pool.close()


@pytest.fixture()
def client(app):
    return app.test_client()

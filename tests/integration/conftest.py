"""Pytest configuration and fixtures for integration tests.

Each test gets its own SQLite file under tmp_path with the schema applied.
"""

import logging
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from hausgeist.core.db_client import DBClient
from hausgeist.core.schema import init_db
from hausgeist.services.task_store import TaskStore


logger = logging.getLogger(__name__)


@pytest.fixture
def db_file(tmp_path: Path) -> Path:
    return tmp_path / "hausgeist.db"


@pytest.fixture
async def db_client(db_file: Path) -> AsyncGenerator[DBClient, None]:
    """Real DBClient over a fresh, initialized database file."""
    client = await DBClient.connect(str(db_file))
    await init_db(client)
    try:
        yield client
    finally:
        await client.close()


@pytest.fixture
def sqlite_store(db_client: DBClient) -> TaskStore:
    return TaskStore(db_client)

"""
Shared pytest fixtures and configuration for all tests.
"""

import asyncio
import os
import sys
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

# Add src directory to path so imports work
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from courses.config import ConnectionConfig
from courses.database.connection import ConnectionHandle, reset_connection
from courses.shutdown import get_shutdown_coordinator


class CountingConnector:
    """Connect primitive double that records every attempt."""

    def __init__(self, database: Any = None, error: Exception | None = None, delay: float = 0.01):
        self.database = database if database is not None else MagicMock()
        self.error = error
        self.delay = delay
        self.calls = 0
        self.configs: list[ConnectionConfig] = []
        self.client = MagicMock()
        self.client.admin.command = AsyncMock(return_value={"ok": 1})
        self.client.close = AsyncMock()

    async def __call__(self, config: ConnectionConfig) -> ConnectionHandle:
        self.calls += 1
        self.configs.append(config)
        await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return ConnectionHandle(
            database_name=config.database_name,
            client=self.client,
            database=self.database,
        )


def make_config(**overrides: Any) -> ConnectionConfig:
    values: dict[str, Any] = {
        "user": "app",
        "password": "s3cret",
        "host": "cluster0.example.net",
        "database_name": "courses",
    }
    values.update(overrides)
    return ConnectionConfig(**values)


def make_collection(documents: list[dict[str, Any]] | None = None) -> MagicMock:
    """A collection double covering the operations the resolvers use."""
    collection = MagicMock()
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=list(documents or []))
    collection.find = MagicMock(return_value=cursor)
    collection.find_one = AsyncMock(return_value=None)
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=ObjectId()))
    collection.insert_many = AsyncMock()
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    collection.update_many = AsyncMock()
    collection.create_index = AsyncMock()
    collection.drop = AsyncMock()
    return collection


@pytest.fixture
def collections() -> dict[str, MagicMock]:
    return {"courses": make_collection(), "students": make_collection()}


@pytest.fixture
def mock_db(collections: dict[str, MagicMock]) -> MagicMock:
    database = MagicMock()
    database.__getitem__.side_effect = lambda name: collections[name]
    return database


@pytest.fixture
def connector(mock_db: MagicMock) -> CountingConnector:
    """Install a connector double behind the shared connection manager."""
    counting = CountingConnector(database=mock_db, delay=0)
    reset_connection(connector=counting, config_factory=make_config)
    return counting


@pytest.fixture(autouse=True)
def reset_shared_connection() -> Generator[None, None, None]:
    """Start every test with an uninitialized connection manager."""
    reset_connection()
    yield
    reset_connection()


@pytest.fixture(autouse=True)
def terminate() -> Generator[MagicMock, None, None]:
    """Keep fatal errors from terminating the test process."""
    coordinator = get_shutdown_coordinator()
    original = coordinator._terminate
    fake = MagicMock()
    coordinator._terminate = fake
    coordinator.exit_code = 0
    coordinator.detach()
    yield fake
    coordinator._terminate = original
    coordinator.exit_code = 0
    coordinator.detach()


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")

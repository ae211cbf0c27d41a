"""Pytest configuration and shared fixtures for all tests.

This module provides:
- Test configuration and markers
- Mocked repositories for the command/query handler tests
- MongoDB fixtures for the integration tests
"""

import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
from _pytest.config import Config
from motor.core import AgnosticDatabase
from motor.motor_asyncio import AsyncIOMotorClient

from domain.repositories import TaskRepository, TaskTypeRepository

# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config: Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (need a MongoDB server)")
    config.addinivalue_line("markers", "asyncio: Async tests")
    config.addinivalue_line("markers", "repository: Repository layer tests")
    config.addinivalue_line("markers", "command: Command handler tests")
    config.addinivalue_line("markers", "query: Query handler tests")


# ============================================================================
# REPOSITORY FIXTURES
# ============================================================================


@pytest.fixture
def mock_task_repository() -> MagicMock:
    """Provide a mock task repository for testing command/query handlers."""
    repository: MagicMock = MagicMock(spec=TaskRepository)
    for name in (
        "search_task",
        "store_task",
        "update_task",
        "delete_task",
        "delete_all_tasks_with_requester",
        "delete_all_messages_with_receiver",
        "retrieve_tasks_page",
        "add_transaction_into_task",
        "add_message_into_transaction",
        "retrieve_task_transactions_page",
        "retrieve_messages_page",
        "migrate_documents_to_current_version",
    ):
        setattr(repository, name, AsyncMock())
    return repository


@pytest.fixture
def mock_task_type_repository() -> MagicMock:
    """Provide a mock task type repository for testing command/query handlers."""
    repository: MagicMock = MagicMock(spec=TaskTypeRepository)
    for name in (
        "search_task_type",
        "store_task_type",
        "update_task_type",
        "delete_task_type",
        "retrieve_task_types_page",
        "migrate_documents_to_current_version",
    ):
        setattr(repository, name, AsyncMock())
    return repository


# ============================================================================
# MONGODB FIXTURES
# ============================================================================

@pytest.fixture
async def mongo_client() -> AsyncGenerator[AsyncIOMotorClient, None]:
    """Provide a MongoDB client for integration tests."""
    client: AsyncIOMotorClient = AsyncIOMotorClient(os.getenv("MONGO_CONNECTION_STRING", "mongodb://localhost:27017"))
    yield client
    client.close()


@pytest.fixture
async def mongo_db(mongo_client: AsyncIOMotorClient) -> AsyncGenerator[AgnosticDatabase, None]:
    """Provide a test database that is cleaned after each test."""
    db: AgnosticDatabase = mongo_client["test_wenet_task_manager"]
    yield db
    # Cleanup: drop all collections after test
    for collection_name in await db.list_collection_names():
        await db[collection_name].drop()

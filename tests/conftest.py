"""Shared fixtures: fresh in-memory storage and services for every test."""

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.core.dependencies import (
    get_default_players_service,
    get_group_service,
    get_history_service,
    get_share_service,
    reset_services,
)
from app.core.rate_limit import limiter
from app.main import app
from app.modules.groups.service import GroupService
from app.modules.history.service import HistoryService
from app.modules.players.service import DefaultPlayersService
from app.modules.shares.service import GameShareService
from app.storage.client import BlobStoreClient
from app.storage.memory_blob_store import InMemoryBlobStore

API = settings.api_prefix


@pytest.fixture
def blob_store():
    return InMemoryBlobStore()


@pytest.fixture
def group_service(blob_store):
    return GroupService(blob_store)


@pytest.fixture
def share_service(blob_store):
    return GameShareService(blob_store)


@pytest.fixture
def players_service():
    return DefaultPlayersService(players=[])


@pytest.fixture
def history_service(blob_store):
    return HistoryService(blob_store, max_bytes=1024)


@pytest.fixture(autouse=True)
def fresh_process_services():
    """No cached storage backend or service instance leaks between tests."""
    reset_services()
    BlobStoreClient.reset_store()
    yield
    reset_services()
    BlobStoreClient.reset_store()


@pytest.fixture(autouse=True)
def reset_rate_limit():
    """Every test starts with empty rate-limit counters."""
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def client(group_service, share_service, players_service, history_service):
    app.dependency_overrides[get_group_service] = lambda: group_service
    app.dependency_overrides[get_share_service] = lambda: share_service
    app.dependency_overrides[get_default_players_service] = lambda: players_service
    app.dependency_overrides[get_history_service] = lambda: history_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

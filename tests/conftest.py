from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import pytest
from fastapi.testclient import TestClient

from geckotrack.api.main import create_app
from geckotrack.core.config import Settings
from geckotrack.domain.services import TrackerService
from geckotrack.infrastructure.db import build_engine
from geckotrack.infrastructure.repositories import EntityStore

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture()
async def store() -> AsyncIterator[EntityStore]:
    """Fresh in-memory store seeded with the bootstrap roster."""
    entity_store = EntityStore(build_engine(MEMORY_URL))
    await entity_store.init()
    yield entity_store
    await entity_store.dispose()


@pytest.fixture()
async def empty_store() -> AsyncIterator[EntityStore]:
    """Fresh in-memory store with no students."""
    entity_store = EntityStore(build_engine(MEMORY_URL), seed_roster=False)
    await entity_store.init()
    yield entity_store
    await entity_store.dispose()


@pytest.fixture()
def tracker(store: EntityStore) -> TrackerService:
    return TrackerService(store)


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(
        database_url=MEMORY_URL,
        environment="test",
        teacher_username="admin",
        teacher_name="Mr. Teacher",
        seed_roster=True,
    )


@pytest.fixture()
def test_client(test_settings: Settings) -> Iterator[TestClient]:
    app = create_app(test_settings)
    with TestClient(app) as client:
        yield client

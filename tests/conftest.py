# tests/conftest.py
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

import inventory.api.dependencies as _deps
from inventory.core.config import Settings, get_settings
from inventory.domain.models import ProductDraft
from inventory.main import app
from inventory.repositories.memory_storage import InMemorySlotStorage
from inventory.services.product_store import ProductStore


@pytest.fixture
def test_settings() -> Settings:
    return Settings(storage_backend="memory", webhook_enabled=False)


@pytest.fixture
def client(test_settings: Settings) -> Generator[TestClient, None, None]:
    # Reset the store singletons so each test starts from the seed dataset
    # in fresh in-memory storage.
    _deps.reset_singletons()
    app.state.limiter.reset()
    app.dependency_overrides[get_settings] = lambda: test_settings
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_settings, None)
        _deps.reset_singletons()


@pytest.fixture
def storage() -> InMemorySlotStorage:
    return InMemorySlotStorage()


@pytest.fixture
def store(storage: InMemorySlotStorage) -> ProductStore:
    s = ProductStore(storage=storage)
    s.load()
    return s


@pytest.fixture
def draft() -> ProductDraft:
    return ProductDraft(name="Standing Desk", category="Furniture", quantity="3", price="349.50")

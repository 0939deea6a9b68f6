from collections.abc import Iterator
from pathlib import Path

import pytest

from inventory.domain.models import SEED_PRODUCTS, ProductDraft
from inventory.repositories.memory_storage import InMemorySlotStorage
from inventory.repositories.sqlite_storage import SQLiteSlotStorage
from inventory.services.product_store import ProductStore


@pytest.fixture  # type: ignore[misc]
def sqlite_storage(tmp_path: Path) -> Iterator[SQLiteSlotStorage]:
    storage = SQLiteSlotStorage(f"sqlite:///{tmp_path / 'inventory.db'}")
    storage.initialize()
    yield storage
    storage.dispose()


def test_memory_read_write_clear() -> None:
    storage = InMemorySlotStorage()

    assert storage.read("products") is None
    storage.write("products", "[]")
    assert storage.read("products") == "[]"
    assert storage.clear("products") is True
    assert storage.clear("products") is False


def test_sqlite_empty_slot(sqlite_storage: SQLiteSlotStorage) -> None:
    assert sqlite_storage.read("products") is None


def test_sqlite_write_replaces_slot(sqlite_storage: SQLiteSlotStorage) -> None:
    sqlite_storage.write("products", "[1]")
    sqlite_storage.write("products", "[1, 2]")
    sqlite_storage.write("other", "{}")

    assert sqlite_storage.read("products") == "[1, 2]"
    assert sqlite_storage.read("other") == "{}"


def test_sqlite_clear(sqlite_storage: SQLiteSlotStorage) -> None:
    sqlite_storage.write("products", "[]")

    assert sqlite_storage.clear("products") is True
    assert sqlite_storage.read("products") is None
    assert sqlite_storage.clear("products") is False


def test_store_survives_restart_with_sqlite(tmp_path: Path) -> None:
    url = f"sqlite:///{tmp_path / 'restart.db'}"

    first = SQLiteSlotStorage(url)
    first.initialize()
    store = ProductStore(storage=first)
    store.load()
    created = store.add(
        ProductDraft(name="Paper Shredder", category="Office Supplies", quantity=1, price="64.90")
    )
    store.remove(4)
    first.dispose()

    second = SQLiteSlotStorage(url)
    second.initialize()
    reloaded = ProductStore(storage=second).load()
    second.dispose()

    assert [p.id for p in reloaded] == [1, 2, 3, 5, created.id]
    assert reloaded[-1] == created
    assert reloaded[0] == SEED_PRODUCTS[0]

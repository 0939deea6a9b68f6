# src/inventory/api/dependencies.py
from functools import lru_cache

import httpx
from fastapi import Depends

from inventory.core.config import Settings, get_settings
from inventory.repositories.base import AbstractSlotStorage
from inventory.repositories.memory_storage import InMemorySlotStorage
from inventory.repositories.sqlite_storage import SQLiteSlotStorage
from inventory.services.export_service import ExportService
from inventory.services.inventory_view import InventoryView
from inventory.services.notification_service import NotificationService
from inventory.services.product_store import ProductStore


# Shared HTTP Client for webhook notifications (Connection Pooling)
@lru_cache
def get_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers={"User-Agent": "InventoryManager/1.0"},
        follow_redirects=True,
    )


# Singleton Storage (initialized on first access)
_storage: AbstractSlotStorage | None = None


def get_storage(settings: Settings = Depends(get_settings)) -> AbstractSlotStorage:
    global _storage
    if _storage is None:
        if settings.storage_backend == "memory":
            _storage = InMemorySlotStorage()
        else:
            sqlite_storage = SQLiteSlotStorage(database_url=settings.database_url)
            sqlite_storage.initialize()
            _storage = sqlite_storage
    return _storage


# Singleton Notification Service (holds the toast history)
_notification_service: NotificationService | None = None


def get_notification_service(
    settings: Settings = Depends(get_settings),
) -> NotificationService:
    global _notification_service
    if _notification_service is None:
        _notification_service = NotificationService(
            http_client=get_http_client() if settings.webhook_enabled else None,
            settings=settings,
        )
    return _notification_service


# Singleton Product Store: loaded once per process, closed in the app lifespan
_product_store: ProductStore | None = None


def get_product_store(
    settings: Settings = Depends(get_settings),
    storage: AbstractSlotStorage = Depends(get_storage),
    notifier: NotificationService = Depends(get_notification_service),
) -> ProductStore:
    global _product_store
    if _product_store is None:
        store = ProductStore(storage=storage, slot=settings.storage_slot, notifier=notifier)
        store.load()
        _product_store = store
    return _product_store


# Singleton screen state (search, filters, sort) layered over the store
_inventory_view: InventoryView | None = None


def get_inventory_view(store: ProductStore = Depends(get_product_store)) -> InventoryView:
    global _inventory_view
    if _inventory_view is None:
        _inventory_view = InventoryView(store)
    return _inventory_view


def get_export_service() -> ExportService:
    return ExportService()


async def drain_notifications() -> None:
    """Lets webhook deliveries still in flight finish before the client is closed."""
    if _notification_service is not None:
        await _notification_service.drain()


def reset_singletons() -> None:
    """Tears down the process-level store and its collaborators."""
    global _storage, _notification_service, _product_store, _inventory_view
    if _inventory_view is not None:
        _inventory_view.close()
    if _product_store is not None:
        _product_store.close()
    if isinstance(_storage, SQLiteSlotStorage):
        _storage.dispose()
    _storage = None
    _notification_service = None
    _product_store = None
    _inventory_view = None

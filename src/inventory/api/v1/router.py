# src/inventory/api/v1/router.py
from fastapi import APIRouter

from inventory.api.v1 import categories, notifications, products, view

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(products.router)
api_router.include_router(categories.router)
api_router.include_router(notifications.router)
api_router.include_router(view.router)

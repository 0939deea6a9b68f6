# src/inventory/repositories/memory_storage.py
from __future__ import annotations

from inventory.repositories.base import AbstractSlotStorage


class InMemorySlotStorage(AbstractSlotStorage):
    """
    Process-local storage, used for tests and for STORAGE_BACKEND=memory.
    Nothing survives a restart.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._slots: dict[str, str] = dict(initial or {})

    def read(self, slot: str) -> str | None:
        return self._slots.get(slot)

    def write(self, slot: str, payload: str) -> None:
        self._slots[slot] = payload

    def clear(self, slot: str) -> bool:
        return self._slots.pop(slot, None) is not None

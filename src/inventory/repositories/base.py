from __future__ import annotations

from abc import ABC, abstractmethod


class AbstractSlotStorage(ABC):
    """
    Key/value storage of serialized payloads, one payload per named slot.
    Writes always replace the whole slot.
    """

    @abstractmethod
    def read(self, slot: str) -> str | None:
        """Returns the payload stored under the slot, or None if the slot is empty."""
        ...

    @abstractmethod
    def write(self, slot: str, payload: str) -> None:
        """Overwrites the slot with the given payload."""
        ...

    @abstractmethod
    def clear(self, slot: str) -> bool:
        """Empties the slot. Returns True if there was anything to remove."""
        ...

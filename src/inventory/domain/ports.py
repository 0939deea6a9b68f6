from abc import ABC, abstractmethod

from inventory.domain.models import Severity


class NotifierPort(ABC):
    """
    Collaborator that surfaces store events to the user (toasts).
    Fire-and-forget: the store never consumes a return value.
    """

    @abstractmethod
    def notify(self, message: str, severity: Severity) -> None: ...


# ---------------------------------------------------------------------------
# Custom Domain Exceptions
# ---------------------------------------------------------------------------


class InvalidInputError(Exception):
    def __init__(self, field: str, detail: str):
        super().__init__(f"Invalid value for '{field}': {detail}")
        self.field = field
        self.detail = detail


class ProductNotFoundError(Exception):
    def __init__(self, product_id: int | str):
        super().__init__(f"Product '{product_id}' not found")
        self.product_id = product_id

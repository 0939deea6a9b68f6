# src/inventory/services/product_store.py
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from decimal import Decimal, InvalidOperation

from pydantic import TypeAdapter, ValidationError

from inventory.core.metrics import STORAGE_FALLBACKS, STORAGE_WRITE_FAILURES, STORE_MUTATIONS
from inventory.domain.models import (
    MAX_QUANTITY,
    SEED_PRODUCTS,
    Product,
    ProductDraft,
    ProductEdit,
    Severity,
)
from inventory.domain.ports import InvalidInputError, NotifierPort, ProductNotFoundError
from inventory.repositories.base import AbstractSlotStorage

logger = logging.getLogger(__name__)

ProductObserver = Callable[[tuple[Product, ...]], None]

_COLLECTION = TypeAdapter(list[Product])


def serialize_products(products: Sequence[Product]) -> str:
    return _COLLECTION.dump_json(list(products)).decode("utf-8")


def deserialize_products(payload: str) -> list[Product]:
    """Parses a stored collection. Raises ValueError if the payload is not a valid one."""
    products = _COLLECTION.validate_json(payload)
    ids = [p.id for p in products]
    if len(ids) != len(set(ids)):
        raise ValueError("duplicate product ids in stored collection")
    return products


def _coerce_price(value: Decimal | str) -> Decimal:
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidInputError("price", f"'{value}' is not a number") from None
    if not price.is_finite():
        raise InvalidInputError("price", f"'{value}' is not a number")
    if price <= 0:
        raise InvalidInputError("price", "must be greater than zero")
    return price


def _coerce_quantity(value: int | str) -> int:
    if isinstance(value, int):
        quantity = value
    else:
        raw = str(value).strip()
        # An untouched form field sends an empty string
        if not raw:
            return 0
        try:
            number = Decimal(raw)
        except InvalidOperation:
            raise InvalidInputError("quantity", f"'{value}' is not a number") from None
        if not number.is_finite() or number != number.to_integral_value():
            raise InvalidInputError("quantity", f"'{value}' is not a whole number")
        if number > MAX_QUANTITY:
            raise InvalidInputError("quantity", f"must not exceed {MAX_QUANTITY}")
        quantity = int(number)
    if quantity < 0:
        raise InvalidInputError("quantity", "must not be negative")
    if quantity > MAX_QUANTITY:
        raise InvalidInputError("quantity", f"must not exceed {MAX_QUANTITY}")
    return quantity


class ProductStore:
    """
    Sole owner of the canonical product collection.

    Every accepted mutation is persisted (whole collection, single slot),
    reported to the notifier and pushed to subscribed observers before the
    call returns. Rejected mutations leave memory and storage untouched.
    """

    def __init__(
        self,
        storage: AbstractSlotStorage,
        slot: str = "products",
        notifier: NotifierPort | None = None,
        seed: Iterable[Product] = SEED_PRODUCTS,
    ) -> None:
        self._storage = storage
        self._slot = slot
        self._notifier = notifier
        self._seed = tuple(seed)
        self._products: list[Product] = []
        self._next_id = 1
        self._observers: list[ProductObserver] = []

    @property
    def products(self) -> tuple[Product, ...]:
        return tuple(self._products)

    def load(self) -> tuple[Product, ...]:
        """Reads the persisted collection, falling back to the seed set if missing or corrupt."""
        try:
            payload = self._storage.read(self._slot)
        except Exception:
            logger.exception("Failed to read product storage slot %r", self._slot)
            payload = None
            reason = "read_error"
        else:
            reason = "empty"

        products: list[Product] | None = None
        if payload is not None:
            try:
                products = deserialize_products(payload)
            except ValueError as e:
                logger.warning("Discarding unreadable data in slot %r: %s", self._slot, e)
                reason = "corrupt"

        if products is None:
            STORAGE_FALLBACKS.labels(reason=reason).inc()
            logger.info(
                "Seeding slot %r with %d products (%s)", self._slot, len(self._seed), reason
            )
            self._products = list(self._seed)
            self._persist()
        else:
            self._products = products

        self._next_id = max(self._next_id, max((p.id for p in self._products), default=0) + 1)
        self._publish()
        return self.products

    def get(self, product_id: int) -> Product:
        return self._products[self._index_of(product_id)]

    def add(self, draft: ProductDraft) -> Product:
        try:
            product = self._build(self._next_id, draft)
        except InvalidInputError:
            STORE_MUTATIONS.labels(operation="add", outcome="rejected").inc()
            raise

        self._next_id += 1
        self._products.append(product)
        self._commit("add", f"Added new product: {product.name}", Severity.SUCCESS)
        return product

    def update(self, edit: ProductEdit) -> Product:
        """Replaces the product with the same id, keeping its position in the collection."""
        try:
            product = self._build(edit.id, edit)
            index = self._index_of(edit.id)
        except (InvalidInputError, ProductNotFoundError):
            STORE_MUTATIONS.labels(operation="update", outcome="rejected").inc()
            raise

        self._products[index] = product
        self._commit("update", f"Updated product: {product.name}", Severity.INFO)
        return product

    def remove(self, product_id: int) -> Product:
        """Deletes a product and returns the removed record."""
        try:
            index = self._index_of(product_id)
        except ProductNotFoundError:
            STORE_MUTATIONS.labels(operation="remove", outcome="rejected").inc()
            raise

        removed = self._products.pop(index)
        self._commit("remove", f"Deleted product: {removed.name}", Severity.ERROR)
        return removed

    def subscribe(self, observer: ProductObserver) -> Callable[[], None]:
        """Registers an observer for collection changes. Returns a callable that unsubscribes it."""
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def close(self) -> None:
        self._observers.clear()

    def _index_of(self, product_id: int) -> int:
        for i, product in enumerate(self._products):
            if product.id == product_id:
                return i
        raise ProductNotFoundError(product_id)

    def _build(self, product_id: int, draft: ProductDraft) -> Product:
        name = draft.name.strip()
        if not name:
            raise InvalidInputError("name", "must not be empty")
        category = draft.category.strip()
        if not category:
            raise InvalidInputError("category", "must not be empty")
        price = _coerce_price(draft.price)
        quantity = _coerce_quantity(draft.quantity)

        try:
            return Product(
                id=product_id, name=name, category=category, quantity=quantity, price=price
            )
        except ValidationError as e:
            error = e.errors()[0]
            field = str(error["loc"][0]) if error["loc"] else "product"
            raise InvalidInputError(field, error["msg"]) from None

    def _commit(self, operation: str, message: str, severity: Severity) -> None:
        self._persist()
        STORE_MUTATIONS.labels(operation=operation, outcome="accepted").inc()
        if self._notifier:
            self._notifier.notify(message, severity)
        self._publish()

    def _persist(self) -> None:
        try:
            self._storage.write(self._slot, serialize_products(self._products))
        except Exception:
            # Memory stays authoritative; the next accepted mutation rewrites the slot.
            STORAGE_WRITE_FAILURES.inc()
            logger.exception(
                "Failed to persist %d products to slot %r", len(self._products), self._slot
            )

    def _publish(self) -> None:
        snapshot = self.products
        for observer in list(self._observers):
            observer(snapshot)

# src/inventory/domain/models.py
from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from enum import StrEnum
from typing import Self

from pydantic import BaseModel, Field, field_validator, model_validator

# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------


class Category(StrEnum):
    ELECTRONICS = "Electronics"
    FURNITURE = "Furniture"
    APPLIANCES = "Appliances"
    OFFICE_SUPPLIES = "Office Supplies"
    OTHER = "Other"


class Severity(StrEnum):
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


class SortOption(StrEnum):
    NONE = "none"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
    QUANTITY_ASC = "quantity-asc"
    QUANTITY_DESC = "quantity-desc"

    @classmethod
    def parse(cls, value: str | None) -> SortOption:
        """Accepts canonical values as well as the labels used by the screen's sort dialog."""
        if not value:
            return cls.NONE
        key = value.strip().lower()
        if key in _SORT_ALIASES:
            return _SORT_ALIASES[key]
        return cls(key)


_SORT_ALIASES: dict[str, SortOption] = {
    "": SortOption.NONE,
    "price-low-high": SortOption.PRICE_ASC,
    "price-high-low": SortOption.PRICE_DESC,
    "name-a-z": SortOption.NAME_ASC,
    "name-z-a": SortOption.NAME_DESC,
    "quantity-low-high": SortOption.QUANTITY_ASC,
    "quantity-high-low": SortOption.QUANTITY_DESC,
}


# ---------------------------------------------------------------------------
# Aggregate: Product
# ---------------------------------------------------------------------------

# Stored JSON quantities must fit a signed 64-bit integer
MAX_QUANTITY = 2**63 - 1


class Product(BaseModel):
    """
    A single inventory record.
    Instances are immutable; edits replace the record in the store.
    """

    id: int = Field(ge=1)
    name: str = Field(min_length=1, max_length=512)
    category: str = Field(min_length=1, max_length=128)
    quantity: int = Field(ge=0, le=MAX_QUANTITY)
    # Serialized as a string in JSON so two-decimal prices round-trip exactly
    price: Decimal = Field(ge=0)

    model_config = {"frozen": True}


class ProductDraft(BaseModel):
    """
    Payload for creating or editing a product.
    Kept loose on purpose: form inputs arrive as strings and the store decides
    what is acceptable (see ProductStore validation).
    """

    name: str = ""
    category: str = ""
    quantity: int | str = 0
    price: Decimal | str = Decimal("0")

    model_config = {"frozen": True}


class ProductEdit(ProductDraft):
    """Edited copy of an existing product; the id selects the record and never changes."""

    id: int


# ---------------------------------------------------------------------------
# View parameters
# ---------------------------------------------------------------------------


class FilterCriteria(BaseModel):
    category: str | None = None
    min_price: Decimal | None = Field(default=None, ge=0)
    max_price: Decimal | None = Field(default=None, ge=0)

    @field_validator("category", mode="before")
    @classmethod
    def blank_category_is_unset(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("min_price", "max_price", mode="before")
    @classmethod
    def blank_price_is_unset(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    model_config = {"frozen": True}


class ViewState(BaseModel):
    search_term: str = ""
    filters: FilterCriteria = Field(default_factory=FilterCriteria)
    sort_option: SortOption = SortOption.NONE

    @field_validator("sort_option", mode="before")
    @classmethod
    def accept_sort_aliases(cls, value: object) -> object:
        if value is None or isinstance(value, str):
            return SortOption.parse(value)
        return value

    model_config = {"frozen": True}


class InventoryViewResponse(BaseModel):
    state: ViewState
    rows: list[Product]


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------


class Notification(BaseModel):
    message: str
    severity: Severity
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# API Request/Response Schemas
# ---------------------------------------------------------------------------


class ProductQueryParams(BaseModel):
    q: str = ""
    category: str | None = None
    min_price: Decimal | None = Field(default=None, ge=0)
    max_price: Decimal | None = Field(default=None, ge=0)
    sort: SortOption = SortOption.NONE

    @field_validator("sort", mode="before")
    @classmethod
    def accept_sort_aliases(cls, value: object) -> object:
        if value is None or isinstance(value, str):
            return SortOption.parse(value)
        return value

    @model_validator(mode="after")
    def check_price_range(self) -> Self:
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.max_price < self.min_price
        ):
            raise ValueError("'max_price' must be greater than or equal to 'min_price'")
        return self

    def to_view_state(self) -> ViewState:
        return ViewState(
            search_term=self.q,
            filters=FilterCriteria(
                category=self.category,
                min_price=self.min_price,
                max_price=self.max_price,
            ),
            sort_option=self.sort,
        )


# ---------------------------------------------------------------------------
# Seed dataset
# ---------------------------------------------------------------------------

SEED_PRODUCTS: tuple[Product, ...] = tuple(
    Product(id=i, name=name, category=category.value, quantity=quantity, price=Decimal(price))
    for i, (name, category, quantity, price) in enumerate(
        [
            ("Laptop", Category.ELECTRONICS, 10, "999.99"),
            ("Desk Chair", Category.FURNITURE, 15, "199.99"),
            ("Wireless Mouse", Category.ELECTRONICS, 30, "29.99"),
            ("Coffee Maker", Category.APPLIANCES, 8, "79.99"),
            ("Bookshelf", Category.FURNITURE, 5, "149.99"),
        ],
        start=1,
    )
)

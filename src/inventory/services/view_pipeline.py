"""
Derived view of the product collection: search, filter, sort.

All functions are pure. The display list is recomputed from the canonical
collection every time an input changes; nothing is cached between calls.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from inventory.domain.models import FilterCriteria, Product, SortOption, ViewState


def name_collation_key(name: str) -> tuple[str, str]:
    """
    Collation used for name sorting, independent of the process locale.

    Primary: compatibility-decomposed, accent-stripped, casefolded text, so
    "émile" sorts with "Emile" and "apple" before "Banana".
    Secondary: the raw name, to keep the order total.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), name


def matches_search(product: Product, search_term: str) -> bool:
    if not search_term:
        return True
    needle = search_term.casefold()
    return needle in product.name.casefold() or needle in product.category.casefold()


def matches_filters(product: Product, filters: FilterCriteria) -> bool:
    if filters.category is not None and product.category != filters.category:
        return False
    if filters.min_price is not None and product.price < filters.min_price:
        return False
    if filters.max_price is not None and product.price > filters.max_price:
        return False
    return True


# sort option -> (key, descending)
_SORT_KEYS: dict[SortOption, tuple[Callable[[Product], Any], bool]] = {
    SortOption.PRICE_ASC: (lambda p: p.price, False),
    SortOption.PRICE_DESC: (lambda p: p.price, True),
    SortOption.NAME_ASC: (lambda p: name_collation_key(p.name), False),
    SortOption.NAME_DESC: (lambda p: name_collation_key(p.name), True),
    SortOption.QUANTITY_ASC: (lambda p: p.quantity, False),
    SortOption.QUANTITY_DESC: (lambda p: p.quantity, True),
}


def sort_products(products: Iterable[Product], sort_option: SortOption) -> list[Product]:
    """Stable sort; products with equal keys keep their incoming order in both directions."""
    if sort_option is SortOption.NONE:
        return list(products)
    key, descending = _SORT_KEYS[sort_option]
    return sorted(products, key=key, reverse=descending)


def apply_view(
    products: Sequence[Product],
    search_term: str = "",
    filters: FilterCriteria | None = None,
    sort_option: SortOption = SortOption.NONE,
) -> list[Product]:
    criteria = filters or FilterCriteria()
    visible = [
        p for p in products if matches_search(p, search_term) and matches_filters(p, criteria)
    ]
    return sort_products(visible, sort_option)


def apply_view_state(products: Sequence[Product], state: ViewState) -> list[Product]:
    return apply_view(products, state.search_term, state.filters, state.sort_option)

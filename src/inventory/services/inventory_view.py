from __future__ import annotations

from collections.abc import Callable

from inventory.domain.models import FilterCriteria, Product, SortOption, ViewState
from inventory.services.product_store import ProductStore
from inventory.services.view_pipeline import apply_view_state

RowsObserver = Callable[[list[Product]], None]


class InventoryView:
    """
    Session state of the inventory screen.

    Holds the transient view parameters and re-derives the visible rows
    whenever the store accepts a mutation or a parameter changes. The rows are
    pushed to every subscriber; nothing is persisted.
    """

    def __init__(self, store: ProductStore, state: ViewState | None = None) -> None:
        self._store = store
        self._state = state or ViewState()
        self._observers: list[RowsObserver] = []
        self._unsubscribe_store = store.subscribe(lambda _products: self._refresh())

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def rows(self) -> list[Product]:
        return apply_view_state(self._store.products, self._state)

    def subscribe(self, observer: RowsObserver) -> Callable[[], None]:
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def set_search_term(self, search_term: str) -> list[Product]:
        return self._update(search_term=search_term)

    def clear_search(self) -> list[Product]:
        return self._update(search_term="")

    def set_filters(self, filters: FilterCriteria) -> list[Product]:
        return self._update(filters=filters)

    def reset_filters(self) -> list[Product]:
        return self._update(filters=FilterCriteria())

    def set_sort_option(self, sort_option: SortOption | str | None) -> list[Product]:
        if not isinstance(sort_option, SortOption):
            sort_option = SortOption.parse(sort_option)
        return self._update(sort_option=sort_option)

    def apply_state(self, state: ViewState) -> list[Product]:
        """Replaces search term, filters and sort in one step."""
        self._state = state
        return self._refresh()

    def close(self) -> None:
        self._unsubscribe_store()
        self._observers.clear()

    def _update(self, **changes: object) -> list[Product]:
        self._state = self._state.model_copy(update=changes)
        return self._refresh()

    def _refresh(self) -> list[Product]:
        rows = self.rows
        for observer in list(self._observers):
            observer(list(rows))
        return rows

from typing import Annotated

from fastapi import APIRouter, Depends

from inventory.api.dependencies import get_inventory_view
from inventory.domain.models import InventoryViewResponse, ViewState
from inventory.services.inventory_view import InventoryView

router = APIRouter(prefix="/view", tags=["View"])

ViewDep = Annotated[InventoryView, Depends(get_inventory_view)]


def _response(view: InventoryView) -> InventoryViewResponse:
    return InventoryViewResponse(state=view.state, rows=view.rows)


@router.get("/", response_model=InventoryViewResponse)
async def get_view(view: ViewDep) -> InventoryViewResponse:
    """Current screen state and the rows it selects from the live stock."""
    return _response(view)


@router.put("/", response_model=InventoryViewResponse)
async def replace_view(state: ViewState, view: ViewDep) -> InventoryViewResponse:
    view.apply_state(state)
    return _response(view)


@router.delete("/search", response_model=InventoryViewResponse)
async def clear_search(view: ViewDep) -> InventoryViewResponse:
    view.clear_search()
    return _response(view)


@router.delete("/filters", response_model=InventoryViewResponse)
async def reset_filters(view: ViewDep) -> InventoryViewResponse:
    view.reset_filters()
    return _response(view)

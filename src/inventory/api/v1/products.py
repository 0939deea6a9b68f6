from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse
from pydantic import ValidationError

from inventory.api.dependencies import get_export_service, get_product_store
from inventory.domain.models import Product, ProductDraft, ProductEdit, ProductQueryParams
from inventory.domain.ports import InvalidInputError, ProductNotFoundError
from inventory.services.export_service import ExportService
from inventory.services.product_store import ProductStore
from inventory.services.view_pipeline import apply_view_state

router = APIRouter(prefix="/products", tags=["Products"])

StoreDep = Annotated[ProductStore, Depends(get_product_store)]
ExportServiceDep = Annotated[ExportService, Depends(get_export_service)]


def get_view_params(
    q: str = "",
    category: str | None = None,
    min_price: Decimal | None = Query(None, ge=0),
    max_price: Decimal | None = Query(None, ge=0),
    sort: str | None = None,
) -> ProductQueryParams:
    try:
        return ProductQueryParams(
            q=q, category=category, min_price=min_price, max_price=max_price, sort=sort
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


ViewParamsDep = Annotated[ProductQueryParams, Depends(get_view_params)]


@router.get("/", response_model=list[Product])
async def list_products(store: StoreDep, params: ViewParamsDep) -> list[Product]:
    """
    Returns the visible products: search, filters and sort applied to the current stock.
    """
    return apply_view_state(store.products, params.to_view_state())


@router.get("/export/csv")
async def export_products_csv(
    store: StoreDep,
    params: ViewParamsDep,
    export_service: ExportServiceDep,
) -> StreamingResponse:
    rows = apply_view_state(store.products, params.to_view_state())
    return StreamingResponse(
        export_service.generate_csv(rows),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="products.csv"'},
    )


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: int, store: StoreDep) -> Product:
    try:
        return store.get(product_id)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product(payload: ProductDraft, store: StoreDep) -> Product:
    try:
        return store.add(payload)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.put("/{product_id}", response_model=Product)
async def update_product(product_id: int, payload: ProductDraft, store: StoreDep) -> Product:
    edit = ProductEdit(id=product_id, **payload.model_dump())
    try:
        return store.update(edit)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.delete("/{product_id}", response_model=Product)
async def delete_product(product_id: int, store: StoreDep) -> Product:
    """
    Deletes a product and returns the removed record.
    """
    try:
        return store.remove(product_id)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

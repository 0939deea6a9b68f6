from fastapi import APIRouter

from inventory.domain.models import Category

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("/", response_model=list[str])
async def list_categories() -> list[str]:
    return [c.value for c in Category]

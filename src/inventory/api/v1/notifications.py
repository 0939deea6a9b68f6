from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from inventory.api.dependencies import get_notification_service
from inventory.domain.models import Notification
from inventory.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["Notifications"])

ServiceDep = Annotated[NotificationService, Depends(get_notification_service)]


@router.get("/", response_model=list[Notification])
async def list_notifications(
    service: ServiceDep,
    limit: int | None = Query(None, ge=1, le=100),
) -> list[Notification]:
    return service.recent(limit)


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
async def clear_notifications(service: ServiceDep) -> None:
    service.clear()

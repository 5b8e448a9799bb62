"""Notification endpoints."""

from fastapi import APIRouter, status

from odontoapp.dependencies import Notifications
from odontoapp.schemas.notifications import Notification, NotificationListResponse
from odontoapp.services.notification_service import NotificationService

router = APIRouter()


def _list_response(
    service: NotificationService, message: str | None = None
) -> NotificationListResponse:
    return NotificationListResponse(
        items=service.notifications,
        unread_count=service.unread_count,
        message=message,
    )


@router.get(
    "/",
    response_model=NotificationListResponse,
    status_code=status.HTTP_200_OK,
    summary="Load alerts",
)
async def list_notifications(service: Notifications) -> NotificationListResponse:
    """Reload the alerts list."""
    service.load()
    return _list_response(service)


@router.post(
    "/read-all",
    response_model=NotificationListResponse,
    status_code=status.HTTP_200_OK,
    summary="Mark every alert read",
)
async def mark_all_read(service: Notifications) -> NotificationListResponse:
    service.mark_all_read()
    return _list_response(service, NotificationService.ALL_READ_MESSAGE)


@router.post(
    "/{notification_id}/read",
    response_model=Notification,
    status_code=status.HTTP_200_OK,
    summary="Mark one alert read",
)
async def mark_read(notification_id: int, service: Notifications) -> Notification:
    return service.mark_read(notification_id)

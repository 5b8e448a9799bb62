"""Notification schemas."""

from pydantic import BaseModel


class Notification(BaseModel):
    """Patient alert."""

    id: int
    titulo: str
    descricao: str | None = None
    data: str
    lido: bool = False


class NotificationListResponse(BaseModel):
    """Alerts screen state."""

    items: list[Notification]
    unread_count: int
    message: str | None = None

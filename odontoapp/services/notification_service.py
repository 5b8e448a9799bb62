"""Alerts screen backed by the static sample notifications."""

import structlog

from odontoapp.core.exceptions import NotFoundException
from odontoapp.reference_data import SAMPLE_NOTIFICATIONS
from odontoapp.schemas.notifications import Notification

logger = structlog.get_logger(__name__)


class NotificationService:
    """
    Patient alerts.

    Notifications have no remote collection yet: the list is the sample set
    and read marks live only in this process until the next reload.
    """

    ALL_READ_MESSAGE = "Todos os alertas foram marcados como lidos."

    def __init__(self, samples: list[dict] | None = None):
        """Initialize service with sample notifications."""
        self.samples = SAMPLE_NOTIFICATIONS if samples is None else samples
        self.notifications: list[Notification] = []
        self.load()

    def load(self) -> list[Notification]:
        """Restore the sample notifications, discarding local read marks."""
        self.notifications = [Notification.model_validate(sample) for sample in self.samples]
        return self.notifications

    def reset(self) -> None:
        self.load()

    @property
    def unread_count(self) -> int:
        return sum(1 for notification in self.notifications if not notification.lido)

    def mark_read(self, notification_id: int) -> Notification:
        """
        Mark one notification as read.

        Raises:
            NotFoundException: If no notification has that id
        """
        for index, notification in enumerate(self.notifications):
            if notification.id == notification_id:
                self.notifications[index] = notification.model_copy(update={"lido": True})
                return self.notifications[index]
        raise NotFoundException("Alerta não encontrado")

    def mark_all_read(self) -> list[Notification]:
        """Mark every notification as read."""
        self.notifications = [
            notification.model_copy(update={"lido": True}) for notification in self.notifications
        ]
        logger.info("notifications_marked_read", count=len(self.notifications))
        return self.notifications

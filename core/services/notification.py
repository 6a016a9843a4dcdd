from __future__ import annotations

from typing import Any

import structlog

from ..models import Notification

logger = structlog.get_logger(__name__)


class NotificationService:
    """Create and read per-user notification records."""

    def __init__(self, user):
        self.user = user

    @staticmethod
    def notify(user, *, title: str, message: str, notification_type: str = Notification.TYPE_SYSTEM) -> Notification:
        notification = Notification.objects.create(
            user=user,
            title=title,
            message=message,
            notification_type=notification_type,
        )
        logger.info(
            "notification_created",
            notification_id=notification.id,
            user_id=user.id,
            notification_type=notification_type,
        )
        return notification

    def notifications(self):
        return Notification.objects.filter(user=self.user).order_by("-created_at", "-id")

    def unread_count(self) -> int:
        return Notification.objects.filter(user=self.user, read=False).count()

    def mark_read(self, notification: Notification) -> Notification:
        if notification.user_id != self.user.id:
            raise PermissionError("Cannot modify notifications for another user.")
        if not notification.read:
            notification.read = True
            notification.save(update_fields=["read"])
        return notification

    def mark_all_read(self) -> int:
        return Notification.objects.filter(user=self.user, read=False).update(read=True)

    def build_context(self) -> dict[str, Any]:
        notifications = list(self.notifications())
        return {
            "notifications": notifications,
            "unread_count": sum(1 for notification in notifications if not notification.read),
        }

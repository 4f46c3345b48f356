"""Notification use cases"""
from .create_notification import CreateNotification
from .update_notifications import (
    MarkNotificationRead,
    MarkAllNotificationsRead,
    ArchiveNotification,
    ClearAllNotifications,
)
from .list_notifications import ListNotifications, GetNotificationSummary
from .dtos import (
    CreateNotificationCommandDTO,
    NotificationResponseDTO,
    ListNotificationsResponseDTO,
    BulkUpdateResponseDTO,
)

__all__ = [
    "CreateNotification",
    "MarkNotificationRead",
    "MarkAllNotificationsRead",
    "ArchiveNotification",
    "ClearAllNotifications",
    "ListNotifications",
    "GetNotificationSummary",
    "CreateNotificationCommandDTO",
    "NotificationResponseDTO",
    "ListNotificationsResponseDTO",
    "BulkUpdateResponseDTO",
]

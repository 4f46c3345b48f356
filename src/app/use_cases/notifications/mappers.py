"""Entity -> DTO conversion for notification responses"""

from src.domain.notification import Notification
from .dtos import NotificationResponseDTO


def _value(item):
    return item.value if hasattr(item, "value") else item


def to_notification_dto(notification: Notification) -> NotificationResponseDTO:
    return NotificationResponseDTO(
        id=notification.id,
        notification_id=notification.notification_id,
        recipient_id=notification.recipient_id,
        sender_id=notification.sender_id,
        type=_value(notification.type),
        priority=_value(notification.priority),
        status=_value(notification.status),
        title=notification.title,
        message=notification.message,
        data=dict(notification.data or {}),
        read_at=notification.read_at,
        created_at=notification.created_at,
    )

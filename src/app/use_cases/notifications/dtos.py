"""Data Transfer Objects for Notification Use Cases"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from src.domain.notification import NotificationPriority, NotificationType


class CreateNotificationCommandDTO(BaseModel):
    """
    Command DTO for sending a notification

    title and message default to the template of the notification type,
    rendered from ``data``.
    """

    recipient_id: str = Field(..., min_length=1)
    type: NotificationType
    priority: NotificationPriority = NotificationPriority.MEDIUM
    title: Optional[str] = Field(default=None, max_length=255)
    message: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)

    class Config:
        json_schema_extra = {
            "example": {
                "recipient_id": "user-123",
                "type": "appointment_booked",
                "priority": "medium",
                "data": {"doctorName": "Dr. Smith", "date": "2024-03-01", "time": "10:30"},
            }
        }


class NotificationResponseDTO(BaseModel):
    id: str
    notification_id: str
    recipient_id: str
    sender_id: Optional[str] = None
    type: str
    priority: str
    status: str
    title: str
    message: str
    data: Dict[str, Any] = Field(default_factory=dict)
    read_at: Optional[datetime] = None
    created_at: datetime


class ListNotificationsResponseDTO(BaseModel):
    notifications: List[NotificationResponseDTO]
    total: int
    unread_count: int
    limit: int
    offset: int


class BulkUpdateResponseDTO(BaseModel):
    """Result of mark-all-read / clear-all"""

    updated: int


__all__ = [
    "CreateNotificationCommandDTO",
    "NotificationResponseDTO",
    "ListNotificationsResponseDTO",
    "BulkUpdateResponseDTO",
]

"""Notification Domain Entity

In-app notifications addressed to a single recipient.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import JSON, String, Text
from src.domain.base import BaseModel, generate_uuid


class NotificationType(str, Enum):
    APPOINTMENT_BOOKED = "appointment_booked"
    APPOINTMENT_CANCELLED = "appointment_cancelled"
    APPOINTMENT_REMINDER = "appointment_reminder"
    REPORT_UPLOADED = "report_uploaded"
    INVOICE_PAYMENT = "invoice_payment"
    LOW_STOCK_ALERT = "low_stock_alert"
    MEDICINE_EXPIRED = "medicine_expired"
    CUSTOM_MESSAGE = "custom_message"
    SYSTEM_ALERT = "system_alert"


class NotificationPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class NotificationStatus(str, Enum):
    UNREAD = "unread"
    READ = "read"
    ARCHIVED = "archived"  # Soft-deleted


class Notification(BaseModel, table=True):
    """
    Notification - Message for one recipient

    Domain Rules:
    - Deleting a notification archives it (status=archived)
    - read_at is set when status moves to read
    """

    __tablename__ = "notifications"
    __table_args__ = (
        Index('ix_notifications_recipient_status', 'recipient_id', 'status'),
        Index('ix_notifications_created_at', 'created_at'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    notification_id: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Display code (e.g., NOT-1704067200000-k3j9qz1ab)"
    )

    recipient_id: str = Field(description="User the notification is addressed to")
    sender_id: Optional[str] = Field(default=None)

    type: NotificationType = Field(description="Notification type")
    priority: NotificationPriority = Field(default=NotificationPriority.MEDIUM)
    status: NotificationStatus = Field(default=NotificationStatus.UNREAD)

    title: str = Field(sa_column=Column(String(255), nullable=False))
    message: str = Field(sa_column=Column(Text, nullable=False))

    data: Dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False, default=dict),
        description="Template data (e.g., medicineName, invoiceNumber)"
    )

    read_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

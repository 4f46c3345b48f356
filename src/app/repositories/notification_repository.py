"""Notification Repository Interface

Defines the contract for notification persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, List
from src.domain.notification import Notification, NotificationType


class NotificationRepository(ABC):
    """
    Repository interface for Notification persistence

    Notifications are never hard-deleted; "delete" archives them.
    """

    @abstractmethod
    async def create(self, notification: Notification) -> Notification:
        """
        Create a new notification

        Args:
            notification: Notification entity to persist

        Returns:
            Created Notification
        """
        pass

    @abstractmethod
    async def get_by_id(self, notification_id: str) -> Optional[Notification]:
        pass

    @abstractmethod
    async def list_by_recipient(
        self,
        recipient_id: str,
        include_archived: bool = False,
    ) -> List[Notification]:
        """
        Retrieve a recipient's notifications, newest first

        Args:
            recipient_id: User the notifications are addressed to
            include_archived: Whether archived notifications are returned

        Returns:
            List of notifications
        """
        pass

    @abstractmethod
    async def list_unread_of_type(
        self,
        recipient_id: str,
        type: NotificationType,
    ) -> List[Notification]:
        """Unread notifications of one type (used to avoid duplicate alerts)"""
        pass

    @abstractmethod
    async def update(self, notification: Notification) -> Notification:
        pass

    @abstractmethod
    async def mark_all_read(self, recipient_id: str, read_at: datetime) -> int:
        """
        Mark every unread notification of a recipient as read

        Returns:
            Number of notifications updated
        """
        pass

    @abstractmethod
    async def archive_all(self, recipient_id: str) -> int:
        """
        Archive every non-archived notification of a recipient

        Returns:
            Number of notifications archived
        """
        pass

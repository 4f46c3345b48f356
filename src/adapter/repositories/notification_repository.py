"""SQLAlchemy Notification Repository Implementation

Implements notification persistence using SQLAlchemy async session.
"""

from typing import Optional, List
from datetime import datetime
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.notification_repository import NotificationRepository
from src.domain.notification import Notification, NotificationStatus, NotificationType


class SqlAlchemyNotificationRepository(NotificationRepository):
    """
    SQLAlchemy implementation of NotificationRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, notification: Notification) -> Notification:
        self.session.add(notification)
        await self.session.flush()
        await self.session.refresh(notification)
        return notification

    async def get_by_id(self, notification_id: str) -> Optional[Notification]:
        statement = select(Notification).where(Notification.id == notification_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

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
        statement = select(Notification).where(Notification.recipient_id == recipient_id)

        if not include_archived:
            statement = statement.where(Notification.status != NotificationStatus.ARCHIVED)

        statement = statement.order_by(Notification.created_at.desc())

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def list_unread_of_type(
        self,
        recipient_id: str,
        type: NotificationType,
    ) -> List[Notification]:
        statement = (
            select(Notification)
            .where(Notification.recipient_id == recipient_id)
            .where(Notification.type == type)
            .where(Notification.status == NotificationStatus.UNREAD)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, notification: Notification) -> Notification:
        notification.updated_at = datetime.utcnow()
        self.session.add(notification)
        await self.session.flush()
        await self.session.refresh(notification)
        return notification

    async def mark_all_read(self, recipient_id: str, read_at: datetime) -> int:
        statement = (
            select(Notification)
            .where(Notification.recipient_id == recipient_id)
            .where(Notification.status == NotificationStatus.UNREAD)
        )
        result = await self.session.execute(statement)
        notifications = list(result.scalars().all())

        for notification in notifications:
            notification.status = NotificationStatus.READ
            notification.read_at = read_at
            notification.updated_at = read_at
            self.session.add(notification)

        await self.session.flush()
        return len(notifications)

    async def archive_all(self, recipient_id: str) -> int:
        statement = (
            select(Notification)
            .where(Notification.recipient_id == recipient_id)
            .where(Notification.status != NotificationStatus.ARCHIVED)
        )
        result = await self.session.execute(statement)
        notifications = list(result.scalars().all())

        now = datetime.utcnow()
        for notification in notifications:
            notification.status = NotificationStatus.ARCHIVED
            notification.updated_at = now
            self.session.add(notification)

        await self.session.flush()
        return len(notifications)

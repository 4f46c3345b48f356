"""Read / archive state changes for a recipient's notifications"""

import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.notification_repository import NotificationRepository
from src.domain.notification import Notification, NotificationStatus
from src.domain.roles import Actor
from .dtos import BulkUpdateResponseDTO, NotificationResponseDTO
from .mappers import to_notification_dto

logger = logging.getLogger(__name__)


class _OwnNotificationUseCase:
    """Shared lookup: callers can only touch notifications addressed to them"""

    def __init__(self, uow: UnitOfWork, notification_repo: NotificationRepository):
        self.uow = uow
        self.notification_repo = notification_repo

    async def _get_own(self, notification_id: str, actor: Actor) -> Optional[Notification]:
        notification = await self.notification_repo.get_by_id(notification_id)
        if not notification or notification.recipient_id != actor.user_id:
            return None
        return notification

    @staticmethod
    def _not_found(notification_id: str) -> Error:
        return Error(
            code="NOTIFICATION_NOT_FOUND",
            message=f"Notification with ID {notification_id} not found",
        )


class MarkNotificationRead(_OwnNotificationUseCase):
    async def execute(
        self,
        notification_id: str,
        actor: Actor,
        now: Optional[datetime] = None,
    ) -> Result[NotificationResponseDTO]:
        try:
            notification = await self._get_own(notification_id, actor)
            if not notification:
                return Return.err(self._not_found(notification_id))

            if notification.status == NotificationStatus.UNREAD:
                notification.status = NotificationStatus.READ
                notification.read_at = now or datetime.utcnow()
                notification = await self.notification_repo.update(notification)
                await self.uow.commit()

            return Return.ok(to_notification_dto(notification))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="MARK_NOTIFICATION_READ_FAILED",
                    message="Failed to mark notification as read",
                    reason=str(e),
                )
            )


class ArchiveNotification(_OwnNotificationUseCase):
    """Deleting a notification archives it"""

    async def execute(self, notification_id: str, actor: Actor) -> Result[NotificationResponseDTO]:
        try:
            notification = await self._get_own(notification_id, actor)
            if not notification:
                return Return.err(self._not_found(notification_id))

            notification.status = NotificationStatus.ARCHIVED
            notification = await self.notification_repo.update(notification)
            await self.uow.commit()

            return Return.ok(to_notification_dto(notification))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="ARCHIVE_NOTIFICATION_FAILED",
                    message="Failed to archive notification",
                    reason=str(e),
                )
            )


class MarkAllNotificationsRead(_OwnNotificationUseCase):
    async def execute(self, actor: Actor, now: Optional[datetime] = None) -> Result[BulkUpdateResponseDTO]:
        try:
            updated = await self.notification_repo.mark_all_read(actor.user_id, now or datetime.utcnow())
            await self.uow.commit()

            logger.info(f"Marked {updated} notifications read for {actor.user_id}")

            return Return.ok(BulkUpdateResponseDTO(updated=updated))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="MARK_ALL_READ_FAILED",
                    message="Failed to mark notifications as read",
                    reason=str(e),
                )
            )


class ClearAllNotifications(_OwnNotificationUseCase):
    """Archives every notification of the caller"""

    async def execute(self, actor: Actor) -> Result[BulkUpdateResponseDTO]:
        try:
            archived = await self.notification_repo.archive_all(actor.user_id)
            await self.uow.commit()

            logger.info(f"Archived {archived} notifications for {actor.user_id}")

            return Return.ok(BulkUpdateResponseDTO(updated=archived))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CLEAR_NOTIFICATIONS_FAILED",
                    message="Failed to clear notifications",
                    reason=str(e),
                )
            )

"""CreateNotification Use Case"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.notification_service import NotificationService
from src.app.repositories.notification_repository import NotificationRepository
from src.domain.calculations import render_notification_template
from src.domain.calculations.identifiers import generate_notification_id
from src.domain.notification import Notification, NotificationPriority, NotificationStatus
from src.domain.roles import Actor
from .dtos import CreateNotificationCommandDTO, NotificationResponseDTO
from .mappers import to_notification_dto

logger = logging.getLogger(__name__)

DELIVERED_PRIORITIES = (NotificationPriority.HIGH, NotificationPriority.CRITICAL)


class CreateNotification:
    """
    Use Case: Send a notification to one recipient

    Business Rules:
    1. Missing title/message come from the template of the notification type
    2. New notifications are unread
    3. High and critical notifications are also pushed through the delivery
       service after commit; delivery failures do not undo the notification
    """

    def __init__(
        self,
        uow: UnitOfWork,
        notification_repo: NotificationRepository,
        delivery_service: Optional[NotificationService] = None,
    ):
        self.uow = uow
        self.notification_repo = notification_repo
        self.delivery_service = delivery_service

    async def execute(
        self,
        command: CreateNotificationCommandDTO,
        actor: Optional[Actor] = None,
    ) -> Result[NotificationResponseDTO]:
        try:
            default_title, default_message = render_notification_template(command.type, command.data)

            notification = Notification(
                notification_id=generate_notification_id(),
                recipient_id=command.recipient_id,
                sender_id=actor.user_id if actor else None,
                type=command.type,
                priority=command.priority,
                status=NotificationStatus.UNREAD,
                title=command.title or default_title,
                message=command.message or default_message,
                data=dict(command.data),
            )

            created = await self.notification_repo.create(notification)
            await self.uow.commit()

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_NOTIFICATION_FAILED",
                    message="Failed to create notification",
                    reason=str(e),
                )
            )

        if self.delivery_service is not None and command.priority in DELIVERED_PRIORITIES:
            delivered = await self.delivery_service.send_alert(created)
            if not delivered:
                logger.warning(f"Notification {created.notification_id} stored but not delivered")

        return Return.ok(to_notification_dto(created))

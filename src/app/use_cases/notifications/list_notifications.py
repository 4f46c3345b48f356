"""
List Notifications Use Case

Retrieves the caller's notifications, most important first.
"""
from datetime import datetime
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.notification_repository import NotificationRepository
from src.app.views import (
    NotificationFilters,
    NotificationSummary,
    filter_notifications,
    paginate,
    sort_notifications,
    summarize_notifications,
)
from src.domain.notification import NotificationStatus
from src.domain.roles import Actor
from .dtos import ListNotificationsResponseDTO
from .mappers import to_notification_dto


class ListNotifications:
    """
    Use case: List notifications

    Order: unread first, then priority (critical highest), then newest.
    Archived notifications are only returned when asked for explicitly.
    """

    def __init__(self, notification_repo: NotificationRepository):
        self.notification_repo = notification_repo

    async def execute(
        self,
        actor: Actor,
        filters: Optional[NotificationFilters] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Result[ListNotificationsResponseDTO]:
        include_archived = bool(filters and filters.status == NotificationStatus.ARCHIVED.value)

        notifications = await self.notification_repo.list_by_recipient(
            actor.user_id, include_archived=include_archived
        )
        unread_count = sum(1 for n in notifications if n.status == NotificationStatus.UNREAD)

        matching = sort_notifications(filter_notifications(notifications, filters))
        page, total = paginate(matching, limit, offset)

        return Return.ok(
            ListNotificationsResponseDTO(
                notifications=[to_notification_dto(n) for n in page],
                total=total,
                unread_count=unread_count,
                limit=limit,
                offset=offset,
            )
        )


class GetNotificationSummary:
    """Unread, today and high priority counts for the caller"""

    def __init__(self, notification_repo: NotificationRepository):
        self.notification_repo = notification_repo

    async def execute(self, actor: Actor, now: Optional[datetime] = None) -> Result[NotificationSummary]:
        notifications = await self.notification_repo.list_by_recipient(actor.user_id)
        return Return.ok(summarize_notifications(notifications, now))

"""Notification API Routes

Every route acts on the caller's own notifications, except sending one.
"""

from typing import Annotated
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.services.notification_service import NotificationService
from src.app.use_cases.notifications import (
    ArchiveNotification,
    BulkUpdateResponseDTO,
    ClearAllNotifications,
    CreateNotification,
    CreateNotificationCommandDTO,
    GetNotificationSummary,
    ListNotifications,
    ListNotificationsResponseDTO,
    MarkAllNotificationsRead,
    MarkNotificationRead,
    NotificationResponseDTO,
)
from src.app.views import NotificationFilters, NotificationSummary
from src.adapter.repositories.notification_repository import SqlAlchemyNotificationRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import STAFF_ROLES, get_current_actor, get_delivery_service, get_session, require_roles
from src.domain.roles import Actor
from src.api.error import raise_for_error

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=ListNotificationsResponseDTO)
async def list_notifications(
    filters: Annotated[NotificationFilters, Query()],
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(get_current_actor),
):
    """
    List the caller's notifications.

    Unread first, then by priority (critical to low), then newest first.
    Archived notifications only show up with `status=archived`.
    """
    use_case = ListNotifications(SqlAlchemyNotificationRepository(session))
    result = await use_case.execute(actor, filters, filters.limit, filters.offset)
    return result.value


@router.get("/summary", response_model=NotificationSummary)
async def get_notification_summary(
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(get_current_actor),
):
    result = await GetNotificationSummary(SqlAlchemyNotificationRepository(session)).execute(actor)
    return result.value


@router.post("", response_model=NotificationResponseDTO, status_code=status.HTTP_201_CREATED)
async def create_notification(
    request: CreateNotificationCommandDTO,
    session: AsyncSession = Depends(get_session),
    delivery_service: NotificationService = Depends(get_delivery_service),
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
):
    """
    Send a notification to a user.

    Title and message default to the template of the notification type.
    High and critical notifications are also pushed to the alert webhook.

    **Returns:**
    - 201: Notification created
    - 400: Invalid request parameters
    """
    use_case = CreateNotification(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyNotificationRepository(session),
        delivery_service,
    )
    result = await use_case.execute(request, actor=actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/read-all", response_model=BulkUpdateResponseDTO)
async def mark_all_notifications_read(
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(get_current_actor),
):
    use_case = MarkAllNotificationsRead(SqlAlchemyUnitOfWork(session), SqlAlchemyNotificationRepository(session))
    result = await use_case.execute(actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/clear-all", response_model=BulkUpdateResponseDTO)
async def clear_all_notifications(
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(get_current_actor),
):
    """Archive every notification of the caller."""
    use_case = ClearAllNotifications(SqlAlchemyUnitOfWork(session), SqlAlchemyNotificationRepository(session))
    result = await use_case.execute(actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/{notification_id}/read", response_model=NotificationResponseDTO)
async def mark_notification_read(
    notification_id: str,
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(get_current_actor),
):
    use_case = MarkNotificationRead(SqlAlchemyUnitOfWork(session), SqlAlchemyNotificationRepository(session))
    result = await use_case.execute(notification_id, actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete("/{notification_id}", response_model=NotificationResponseDTO)
async def archive_notification(
    notification_id: str,
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(get_current_actor),
):
    """
    Delete a notification from the caller's inbox. The record is archived.
    """
    use_case = ArchiveNotification(SqlAlchemyUnitOfWork(session), SqlAlchemyNotificationRepository(session))
    result = await use_case.execute(notification_id, actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value

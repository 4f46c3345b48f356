"""Unit tests for notification use cases"""

import pytest
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.notifications.create_notification import CreateNotification
from src.app.use_cases.notifications.dtos import CreateNotificationCommandDTO
from src.app.use_cases.notifications.list_notifications import ListNotifications
from src.app.use_cases.notifications.update_notifications import (
    ArchiveNotification,
    MarkAllNotificationsRead,
    MarkNotificationRead,
)
from src.domain.notification import (
    Notification,
    NotificationPriority,
    NotificationStatus,
    NotificationType,
)
from src.domain.roles import Actor, UserRole

NOW = datetime(2024, 3, 1, 9, 0)
RECIPIENT = Actor("user-123", UserRole.PATIENT)


def make_notification(id, priority=NotificationPriority.MEDIUM, status=NotificationStatus.UNREAD,
                      recipient_id="user-123", minutes_ago=0):
    return Notification(
        id=id,
        notification_id=f"NOT-{id}",
        recipient_id=recipient_id,
        type=NotificationType.CUSTOM_MESSAGE,
        priority=priority,
        status=status,
        title="Hello",
        message="Message",
        created_at=NOW - timedelta(minutes=minutes_ago),
        updated_at=NOW - timedelta(minutes=minutes_ago),
    )


@pytest.fixture
def mock_notification_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=lambda notification: notification)
    repo.update = AsyncMock(side_effect=lambda notification: notification)
    return repo


@pytest.fixture
def mock_delivery():
    service = MagicMock()
    service.send_alert = AsyncMock(return_value=True)
    return service


@pytest.mark.asyncio
class TestCreateNotification:
    """Test sending notifications"""

    async def test_template_fills_missing_title_and_message(
        self, mock_uow, mock_notification_repo, mock_delivery
    ):
        """
        Given: An appointment notification without title or message
        When: It is created
        Then: The type template supplies both and the notification is unread
        """
        # Arrange
        command = CreateNotificationCommandDTO(
            recipient_id="user-123",
            type=NotificationType.APPOINTMENT_BOOKED,
            data={"doctorName": "Dr. Smith", "date": "2024-03-01", "time": "10:30"},
        )

        # Act
        result = await CreateNotification(mock_uow, mock_notification_repo, mock_delivery).execute(
            command, Actor("REC001", UserRole.RECEPTIONIST)
        )

        # Assert
        assert result.is_ok()
        assert result.value.title == "New Appointment Booked"
        assert result.value.message == "Appointment with Dr. Smith scheduled for 2024-03-01 at 10:30"
        assert result.value.status == NotificationStatus.UNREAD.value
        assert result.value.sender_id == "REC001"
        mock_uow.commit.assert_called_once()
        mock_delivery.send_alert.assert_not_called()

    @pytest.mark.parametrize("priority", [NotificationPriority.HIGH, NotificationPriority.CRITICAL])
    async def test_urgent_notifications_are_delivered(
        self, mock_uow, mock_notification_repo, mock_delivery, priority
    ):
        # Arrange
        command = CreateNotificationCommandDTO(
            recipient_id="user-123",
            type=NotificationType.SYSTEM_ALERT,
            priority=priority,
            title="Maintenance",
            message="System maintenance tonight",
        )

        # Act
        result = await CreateNotification(mock_uow, mock_notification_repo, mock_delivery).execute(command)

        # Assert
        assert result.is_ok()
        mock_delivery.send_alert.assert_called_once()

    async def test_delivery_failure_keeps_notification(
        self, mock_uow, mock_notification_repo, mock_delivery
    ):
        # Arrange
        mock_delivery.send_alert = AsyncMock(return_value=False)
        command = CreateNotificationCommandDTO(
            recipient_id="user-123",
            type=NotificationType.SYSTEM_ALERT,
            priority=NotificationPriority.CRITICAL,
            title="Outage",
            message="Lab system offline",
        )

        # Act
        result = await CreateNotification(mock_uow, mock_notification_repo, mock_delivery).execute(command)

        # Assert
        assert result.is_ok()
        mock_uow.commit.assert_called_once()
        mock_uow.rollback.assert_not_called()

    async def test_repository_failure_rolls_back(self, mock_uow, mock_notification_repo, mock_delivery):
        mock_notification_repo.create = AsyncMock(side_effect=Exception("Database error"))
        command = CreateNotificationCommandDTO(recipient_id="user-123", type=NotificationType.CUSTOM_MESSAGE)

        result = await CreateNotification(mock_uow, mock_notification_repo, mock_delivery).execute(command)

        assert result.error.code == "CREATE_NOTIFICATION_FAILED"
        mock_uow.rollback.assert_called_once()
        mock_delivery.send_alert.assert_not_called()


@pytest.mark.asyncio
class TestListNotifications:
    """Test ordering and unread counts"""

    async def test_unread_first_then_priority_then_newest(self, mock_notification_repo):
        # Arrange
        mock_notification_repo.list_by_recipient = AsyncMock(
            return_value=[
                make_notification("read-critical", NotificationPriority.CRITICAL, NotificationStatus.READ),
                make_notification("unread-low-new", NotificationPriority.LOW, minutes_ago=1),
                make_notification("unread-high", NotificationPriority.HIGH, minutes_ago=30),
                make_notification("unread-low-old", NotificationPriority.LOW, minutes_ago=60),
            ]
        )

        # Act
        result = await ListNotifications(mock_notification_repo).execute(RECIPIENT)

        # Assert
        assert [n.id for n in result.value.notifications] == [
            "unread-high",
            "unread-low-new",
            "unread-low-old",
            "read-critical",
        ]
        assert result.value.unread_count == 3
        mock_notification_repo.list_by_recipient.assert_called_once_with("user-123", include_archived=False)


@pytest.mark.asyncio
class TestUpdateNotifications:
    """Test read and archive transitions"""

    async def test_mark_read_sets_timestamp(self, mock_uow, mock_notification_repo):
        # Arrange
        mock_notification_repo.get_by_id = AsyncMock(return_value=make_notification("n1"))

        # Act
        result = await MarkNotificationRead(mock_uow, mock_notification_repo).execute("n1", RECIPIENT, NOW)

        # Assert
        assert result.value.status == NotificationStatus.READ.value
        assert result.value.read_at == NOW
        mock_uow.commit.assert_called_once()

    async def test_other_users_notification_is_not_found(self, mock_uow, mock_notification_repo):
        # Arrange
        mock_notification_repo.get_by_id = AsyncMock(
            return_value=make_notification("n1", recipient_id="someone-else")
        )

        # Act
        result = await MarkNotificationRead(mock_uow, mock_notification_repo).execute("n1", RECIPIENT, NOW)

        # Assert
        assert result.error.code == "NOTIFICATION_NOT_FOUND"
        mock_notification_repo.update.assert_not_called()

    async def test_archive(self, mock_uow, mock_notification_repo):
        mock_notification_repo.get_by_id = AsyncMock(return_value=make_notification("n1"))

        result = await ArchiveNotification(mock_uow, mock_notification_repo).execute("n1", RECIPIENT)

        assert result.value.status == NotificationStatus.ARCHIVED.value

    async def test_mark_all_read(self, mock_uow, mock_notification_repo):
        mock_notification_repo.mark_all_read = AsyncMock(return_value=4)

        result = await MarkAllNotificationsRead(mock_uow, mock_notification_repo).execute(RECIPIENT, NOW)

        assert result.value.updated == 4
        mock_notification_repo.mark_all_read.assert_called_once_with("user-123", NOW)

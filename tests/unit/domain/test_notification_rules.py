"""Unit tests for notification templates, ordering and upload checks"""

from datetime import datetime, timedelta
from types import SimpleNamespace

from src.domain.calculations import render_notification_template, sort_notifications, validate_report_file
from src.domain.notification import NotificationPriority, NotificationStatus, NotificationType


class TestTemplates:
    def test_payment_template(self):
        title, message = render_notification_template(
            NotificationType.INVOICE_PAYMENT,
            {"amount": "500.00", "invoiceNumber": "INV-2024-000001"},
        )

        assert title == "Payment Received"
        assert message == "Payment of $500.00 received for invoice INV-2024-000001"

    def test_custom_message_falls_back(self):
        title, message = render_notification_template(NotificationType.CUSTOM_MESSAGE, {})

        assert title == "Custom Message"
        assert message == "You have a new message"

    def test_low_stock_template(self):
        _, message = render_notification_template(
            NotificationType.LOW_STOCK_ALERT, {"medicineName": "Amoxicillin", "quantity": 4}
        )

        assert message == "Amoxicillin is running low (4 remaining)"


class TestSortNotifications:
    def test_unread_then_priority_then_newest(self):
        now = datetime(2024, 6, 15, 12, 0)

        def n(name, status, priority, minutes_ago):
            return SimpleNamespace(
                name=name,
                status=status,
                priority=priority,
                created_at=now - timedelta(minutes=minutes_ago),
            )

        notifications = [
            n("read_critical", NotificationStatus.READ, NotificationPriority.CRITICAL, 1),
            n("unread_low_new", NotificationStatus.UNREAD, NotificationPriority.LOW, 1),
            n("unread_high_old", NotificationStatus.UNREAD, NotificationPriority.HIGH, 60),
            n("unread_high_new", NotificationStatus.UNREAD, NotificationPriority.HIGH, 5),
        ]

        ordered = [item.name for item in sort_notifications(notifications)]

        assert ordered == ["unread_high_new", "unread_high_old", "unread_low_new", "read_critical"]
        assert notifications[0].name == "read_critical"


class TestValidateReportFile:
    def test_accepts_pdf(self):
        assert validate_report_file("application/pdf", 1024) is None

    def test_rejects_unknown_type(self):
        assert validate_report_file("text/plain", 10) is not None

    def test_rejects_oversized_file(self):
        assert "10MB" in validate_report_file("image/png", 10 * 1024 * 1024 + 1)

"""Notification templates and ordering"""

from typing import Any, Dict, Iterable, List, Tuple

from src.domain.notification import NotificationPriority, NotificationStatus, NotificationType

PRIORITY_RANK = {
    NotificationPriority.CRITICAL.value: 4,
    NotificationPriority.HIGH.value: 3,
    NotificationPriority.MEDIUM.value: 2,
    NotificationPriority.LOW.value: 1,
}


def _value(item: Any) -> Any:
    return item.value if hasattr(item, "value") else item


def render_notification_template(type: NotificationType, data: Dict[str, Any]) -> Tuple[str, str]:
    """Default (title, message) for a notification type"""
    kind = _value(type)
    get = data.get

    if kind == NotificationType.APPOINTMENT_BOOKED.value:
        return (
            "New Appointment Booked",
            f"Appointment with {get('doctorName')} scheduled for {get('date')} at {get('time')}",
        )
    if kind == NotificationType.APPOINTMENT_CANCELLED.value:
        return (
            "Appointment Cancelled",
            f"Your appointment with {get('doctorName')} on {get('date')} has been cancelled",
        )
    if kind == NotificationType.APPOINTMENT_REMINDER.value:
        return "Appointment Reminder", f"You have an appointment with {get('doctorName')} in 1 hour"
    if kind == NotificationType.REPORT_UPLOADED.value:
        return (
            "New Report Available",
            f"{get('reportType')} report has been uploaded for {get('patientName')}",
        )
    if kind == NotificationType.INVOICE_PAYMENT.value:
        return (
            "Payment Received",
            f"Payment of ${get('amount')} received for invoice {get('invoiceNumber')}",
        )
    if kind == NotificationType.LOW_STOCK_ALERT.value:
        return (
            "Low Stock Alert",
            f"{get('medicineName')} is running low ({get('quantity')} remaining)",
        )
    if kind == NotificationType.MEDICINE_EXPIRED.value:
        return "Medicine Expired", f"{get('medicineName')} has expired on {get('expiryDate')}"
    if kind == NotificationType.CUSTOM_MESSAGE.value:
        return get("title") or "Custom Message", get("message") or "You have a new message"
    if kind == NotificationType.SYSTEM_ALERT.value:
        return "System Alert", get("message") or "System notification"
    return "Notification", "You have a new notification"


def sort_notifications(notifications: Iterable[Any]) -> List[Any]:
    """
    Unread first, then by priority (critical highest), then newest first.

    Returns a new list; the input is left untouched.
    """
    ordered = sorted(notifications, key=lambda n: n.created_at, reverse=True)
    return sorted(
        ordered,
        key=lambda n: (
            _value(n.status) != NotificationStatus.UNREAD.value,
            -PRIORITY_RANK.get(_value(n.priority), 0),
        ),
    )

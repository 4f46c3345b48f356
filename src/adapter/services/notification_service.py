"""Notification Delivery Implementations

Provides concrete implementations for delivering notifications.
"""

import logging
from typing import Optional
import httpx
from src.app.services.notification_service import NotificationService
from src.domain.notification import Notification

logger = logging.getLogger(__name__)


class LoggingNotificationService(NotificationService):
    """
    Delivery service that logs alerts

    Useful for development and testing, or as a fallback.
    """

    async def send_alert(self, notification: Notification) -> bool:
        logger.warning(
            f"[{notification.priority.value.upper()}] {notification.type.value} "
            f"to {notification.recipient_id}: {notification.title} - {notification.message}"
        )
        return True


class WebhookNotificationService(NotificationService):
    """
    Delivery service that posts alerts to an HTTP webhook

    Sends JSON payload to configured webhook URL.
    """

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        """
        Initialize webhook delivery service

        Args:
            webhook_url: URL to POST alerts to
            timeout: Request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def send_alert(self, notification: Notification) -> bool:
        """
        Send notification via webhook

        Args:
            notification: Notification to deliver

        Returns:
            True if webhook call succeeded, False otherwise
        """
        payload = {
            "type": "notification",
            "notification_id": notification.notification_id,
            "recipient_id": notification.recipient_id,
            "notification_type": notification.type.value,
            "priority": notification.priority.value,
            "title": notification.title,
            "message": notification.message,
            "data": notification.data,
            "created_at": notification.created_at.isoformat(),
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.webhook_url, json=payload)
                response.raise_for_status()
                logger.info(
                    f"Webhook delivery sent for {notification.notification_id} to {self.webhook_url}"
                )
                return True
        except httpx.HTTPError as e:
            logger.error(
                f"Failed to deliver {notification.notification_id} via webhook: {e}"
            )
            return False


class CompositeNotificationService(NotificationService):
    """
    Delivery service that fans out to multiple services

    Useful for sending to multiple channels (e.g., log + webhook).
    """

    def __init__(self, services: list[NotificationService]):
        self.services = services

    async def send_alert(self, notification: Notification) -> bool:
        """
        Deliver to all configured services

        Returns:
            True if at least one service succeeded, False otherwise
        """
        success = False
        for service in self.services:
            try:
                if await service.send_alert(notification):
                    success = True
            except Exception as e:
                logger.error(f"Delivery service {type(service).__name__} failed: {e}")
        return success


def create_notification_service(webhook_url: Optional[str] = None) -> NotificationService:
    """
    Factory function to create appropriate delivery service

    Args:
        webhook_url: Optional webhook URL. If provided, creates composite
                     service with logging + webhook. Otherwise, just logging.

    Returns:
        Configured NotificationService
    """
    services: list[NotificationService] = [LoggingNotificationService()]

    if webhook_url:
        services.append(WebhookNotificationService(webhook_url))

    if len(services) == 1:
        return services[0]

    return CompositeNotificationService(services)

"""Notification Delivery Service Interface

Defines the contract for pushing stored notifications out of the process
(operator log, webhook relay). In-app notifications are persisted first;
delivery is best effort.
"""

from abc import ABC, abstractmethod
from src.domain.notification import Notification


class NotificationService(ABC):
    """
    Abstract delivery service for alerts

    Implementations can deliver via:
    - Log sink
    - Webhook (HTTP POST) relaying to a push gateway, chat or pager
    """

    @abstractmethod
    async def send_alert(self, notification: Notification) -> bool:
        """
        Deliver a notification

        Args:
            notification: Stored Notification to deliver

        Returns:
            True if delivered successfully, False otherwise
        """
        pass

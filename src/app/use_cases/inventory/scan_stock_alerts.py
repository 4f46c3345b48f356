"""ScanStockAlerts Use Case

Raises low stock and expiry notifications for the pharmacy.
"""

import logging
from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.medicine_repository import MedicineRepository
from src.app.repositories.notification_repository import NotificationRepository
from src.domain.calculations import DEFAULT_EXPIRING_SOON_DAYS, medicine_status, render_notification_template
from src.domain.calculations.identifiers import generate_notification_id
from src.domain.medicine import Medicine, MedicineStatus
from src.domain.notification import Notification, NotificationPriority, NotificationType
from .dtos import StockAlertScanResultDTO

logger = logging.getLogger(__name__)

ALERTS = {
    MedicineStatus.EXPIRED: (NotificationType.MEDICINE_EXPIRED, NotificationPriority.CRITICAL),
    MedicineStatus.OUT_OF_STOCK: (NotificationType.LOW_STOCK_ALERT, NotificationPriority.CRITICAL),
    MedicineStatus.LOW_STOCK: (NotificationType.LOW_STOCK_ALERT, NotificationPriority.HIGH),
}


class ScanStockAlerts:
    """
    Use Case: Scan inventory for stock alerts

    Business Rules:
    1. Status is recomputed for every medicine; the stored snapshot is refreshed
    2. expired -> medicine_expired (critical)
    3. out_of_stock -> low_stock_alert (critical)
    4. low_stock -> low_stock_alert (high)
    5. No new alert while an unread alert of the same type exists for the
       same medicine and recipient

    Flow:
    1. Get all medicines
    2. Derive status and refresh snapshot
    3. Create missing alerts
    4. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        medicine_repo: MedicineRepository,
        notification_repo: NotificationRepository,
        recipient_id: str,
        expiring_soon_days: int = DEFAULT_EXPIRING_SOON_DAYS,
    ):
        self.uow = uow
        self.medicine_repo = medicine_repo
        self.notification_repo = notification_repo
        self.recipient_id = recipient_id
        self.expiring_soon_days = expiring_soon_days

    async def execute(self, today: Optional[date] = None) -> Result[StockAlertScanResultDTO]:
        today = today or date.today()

        try:
            # Step 1: Get all medicines
            medicines = await self.medicine_repo.list_all()
            result = StockAlertScanResultDTO(
                checked=len(medicines),
                status_counts={status.value: 0 for status in MedicineStatus},
            )

            # Unread alerts already raised, keyed by type
            open_alerts = {}
            for notification_type in (NotificationType.LOW_STOCK_ALERT, NotificationType.MEDICINE_EXPIRED):
                unread = await self.notification_repo.list_unread_of_type(self.recipient_id, notification_type)
                open_alerts[notification_type] = {
                    (n.data or {}).get("medicineId") for n in unread
                }

            for medicine in medicines:
                # Step 2: Derive status
                status = medicine_status(medicine, today, self.expiring_soon_days)
                result.status_counts[status.value] += 1

                if medicine.status != status:
                    medicine.status = status
                    await self.medicine_repo.update(medicine)

                # Step 3: Create missing alerts
                if status not in ALERTS:
                    continue

                notification_type, priority = ALERTS[status]
                if medicine.id in open_alerts[notification_type]:
                    result.skipped_duplicates += 1
                    continue

                notification = await self.notification_repo.create(
                    self._alert(medicine, notification_type, priority)
                )
                open_alerts[notification_type].add(medicine.id)
                result.alerts_created += 1
                result.notification_ids.append(notification.id)

                logger.warning(
                    f"Stock alert for {medicine.name} ({medicine.medicine_id}): {status.value}"
                )

            # Step 4: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Stock scan complete. Checked {result.checked} medicines, "
                f"created {result.alerts_created} alerts"
            )
            return Return.ok(result)

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Stock alert scan failed: {e}")
            return Return.err(
                Error(
                    code="STOCK_ALERT_SCAN_FAILED",
                    message="Failed to scan stock alerts",
                    reason=str(e),
                )
            )

    def _alert(
        self,
        medicine: Medicine,
        notification_type: NotificationType,
        priority: NotificationPriority,
    ) -> Notification:
        data = {
            "medicineId": medicine.id,
            "medicineName": medicine.name,
            "quantity": medicine.quantity,
            "expiryDate": medicine.expiry_date.isoformat(),
        }
        title, message = render_notification_template(notification_type, data)
        return Notification(
            notification_id=generate_notification_id(),
            recipient_id=self.recipient_id,
            type=notification_type,
            priority=priority,
            title=title,
            message=message,
            data=data,
        )

"""Stock Alert Background Worker

Periodically checks pharmacy stock and raises low stock, out of stock and
expiry alerts. Can be run as a standalone script or integrated with a scheduler.
"""

import argparse
import asyncio
import logging
from datetime import date
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.medicine_repository import SqlAlchemyMedicineRepository
from src.adapter.repositories.notification_repository import SqlAlchemyNotificationRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.adapter.services.notification_service import create_notification_service
from src.app.use_cases.inventory import ScanStockAlerts, StockAlertScanResultDTO

logger = logging.getLogger(__name__)


class StockAlertWorker:
    """
    Background worker for pharmacy stock alerts

    Features:
    - Refreshes the stored stock status of every medicine
    - Creates one unread alert per medicine and condition
    - Pushes new alerts through the delivery service (log or webhook)
    - Can run once or continuously

    Usage:
        worker = StockAlertWorker()
        await worker.run_once()

        worker = StockAlertWorker()
        await worker.run_forever(interval_seconds=86400)
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        recipient_id: Optional[str] = None,
        expiring_soon_days: Optional[int] = None,
        webhook_url: Optional[str] = None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            recipient_id: User or group receiving the alerts (defaults to config)
            expiring_soon_days: Expiry warning window in days (defaults to config)
            webhook_url: Alert webhook URL (defaults to config)
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.recipient_id = recipient_id or ApplicationConfig.STOCK_ALERT_RECIPIENT_ID
        self.expiring_soon_days = expiring_soon_days or ApplicationConfig.EXPIRING_SOON_DAYS
        self.webhook_url = webhook_url or ApplicationConfig.ALERT_WEBHOOK_URL

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        self.notification_service = create_notification_service(self.webhook_url)

        logger.info(
            f"StockAlertWorker initialized with recipient={self.recipient_id}, "
            f"expiring_soon_days={self.expiring_soon_days}"
        )

    async def run_once(self, today: Optional[date] = None) -> StockAlertScanResultDTO:
        """
        Run one stock scan

        Args:
            today: Reference date (defaults to today)

        Returns:
            StockAlertScanResultDTO with counts and created notification ids
        """
        if not ApplicationConfig.STOCK_ALERT_ENABLED:
            logger.info("Stock alerts are disabled, skipping")
            return StockAlertScanResultDTO()

        async with self.async_session_factory() as session:
            notification_repo = SqlAlchemyNotificationRepository(session)

            use_case = ScanStockAlerts(
                uow=SqlAlchemyUnitOfWork(session),
                medicine_repo=SqlAlchemyMedicineRepository(session),
                notification_repo=notification_repo,
                recipient_id=self.recipient_id,
                expiring_soon_days=self.expiring_soon_days,
            )

            result = await use_case.execute(today=today)

            if result.is_err():
                logger.error(f"Stock scan failed: {result.error.message}")
                return StockAlertScanResultDTO()

            response = result.value

            for notification_id in response.notification_ids:
                notification = await notification_repo.get_by_id(notification_id)
                if notification:
                    await self.notification_service.send_alert(notification)

            return response

    async def run_forever(self, interval_seconds: Optional[int] = None):
        """
        Run scans continuously at the given interval

        Args:
            interval_seconds: Seconds between scans (defaults to config, daily)
        """
        interval_seconds = interval_seconds or ApplicationConfig.STOCK_ALERT_INTERVAL_SECONDS
        logger.info(f"Starting continuous stock alert scan with {interval_seconds}s interval")

        while True:
            try:
                response = await self.run_once()
                logger.info(
                    f"Stock scan complete. Checked {response.checked} medicines, "
                    f"created {response.alerts_created} alerts"
                )
            except Exception as e:
                logger.error(f"Stock scan cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("StockAlertWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        python -m src.worker.stock_alert_worker [--once] [--interval SECONDS]
    """
    parser = argparse.ArgumentParser(description="Pharmacy stock alert worker")
    parser.add_argument("--once", action="store_true", help="Run a single scan and exit")
    parser.add_argument("--interval", type=int, default=None, help="Seconds between scans")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    worker = StockAlertWorker()

    if args.once:
        response = await worker.run_once()
        print(
            f"Stock scan complete. Checked {response.checked} medicines, "
            f"created {response.alerts_created} alerts."
        )
        await worker.shutdown()
    else:
        try:
            await worker.run_forever(args.interval)
        except KeyboardInterrupt:
            logger.info("Received shutdown signal")
        finally:
            await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())

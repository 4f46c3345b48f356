"""Overdue Invoice Background Worker

Marks unpaid invoices past their due date as overdue and reminds the patient.
"""

import argparse
import asyncio
import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.notification_repository import SqlAlchemyNotificationRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.billing import MarkOverdueInvoices, MarkOverdueResultDTO

logger = logging.getLogger(__name__)


class OverdueInvoiceWorker:
    """
    Background worker for overdue invoices

    Usage:
        worker = OverdueInvoiceWorker()
        await worker.run_once()

        worker = OverdueInvoiceWorker()
        await worker.run_forever(interval_seconds=3600)
    """

    def __init__(self, db_uri: Optional[str] = None, notify_patients: bool = True):
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.notify_patients = notify_patients

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info("OverdueInvoiceWorker initialized")

    async def run_once(self, now: Optional[datetime] = None) -> MarkOverdueResultDTO:
        """
        Run one overdue scan

        Args:
            now: Reference time (defaults to current UTC time)

        Returns:
            MarkOverdueResultDTO with the invoices marked overdue
        """
        if not ApplicationConfig.OVERDUE_SCAN_ENABLED:
            logger.info("Overdue invoice scan is disabled, skipping")
            return MarkOverdueResultDTO()

        async with self.async_session_factory() as session:
            use_case = MarkOverdueInvoices(
                uow=SqlAlchemyUnitOfWork(session),
                invoice_repo=SqlAlchemyInvoiceRepository(session),
                notification_repo=SqlAlchemyNotificationRepository(session) if self.notify_patients else None,
            )

            result = await use_case.execute(now=now)

            if result.is_err():
                logger.error(f"Overdue scan failed: {result.error.message}")
                return MarkOverdueResultDTO(errors=[result.error.message])

            return result.value

    async def run_forever(self, interval_seconds: Optional[int] = None):
        interval_seconds = interval_seconds or ApplicationConfig.OVERDUE_SCAN_INTERVAL_SECONDS
        logger.info(f"Starting continuous overdue scan with {interval_seconds}s interval")

        while True:
            try:
                response = await self.run_once()
                logger.info(
                    f"Overdue scan complete. Checked {response.checked} invoices, "
                    f"marked {response.marked} overdue"
                )
            except Exception as e:
                logger.error(f"Overdue scan cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("OverdueInvoiceWorker shutdown complete")


async def main():
    """
    Usage:
        python -m src.worker.overdue_invoice_worker [--once] [--interval SECONDS]
    """
    parser = argparse.ArgumentParser(description="Overdue invoice worker")
    parser.add_argument("--once", action="store_true", help="Run a single scan and exit")
    parser.add_argument("--interval", type=int, default=None, help="Seconds between scans")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    worker = OverdueInvoiceWorker()

    if args.once:
        response = await worker.run_once()
        print(f"Overdue scan complete. Marked {response.marked} of {response.checked} invoices.")
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

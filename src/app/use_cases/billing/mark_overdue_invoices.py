"""MarkOverdueInvoices Use Case

Moves unpaid invoices past their due date to the stored ``overdue`` status and
raises a reminder for each patient.
"""

import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.notification_repository import NotificationRepository
from src.domain.calculations import days_overdue, is_invoice_overdue, render_notification_template
from src.domain.calculations.identifiers import generate_notification_id
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.notification import Notification, NotificationPriority, NotificationType
from .dtos import MarkOverdueResultDTO

logger = logging.getLogger(__name__)


class MarkOverdueInvoices:
    """
    Use Case: Mark overdue invoices

    Business Rules:
    1. Only pending and partially paid invoices are candidates
    2. An invoice is overdue when now > due_date (strict)
    3. Paid and cancelled invoices are never touched
    4. Each newly overdue invoice produces one reminder for its patient
    5. Amounts are unchanged; paying an overdue invoice moves it back to
       partially_paid or paid

    Flow:
    1. Get unpaid invoices due before now
    2. Mark each one overdue
    3. Create patient reminders (when a notification repository is given)
    4. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        notification_repo: Optional[NotificationRepository] = None,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.notification_repo = notification_repo

    async def execute(self, now: Optional[datetime] = None) -> Result[MarkOverdueResultDTO]:
        now = now or datetime.utcnow()

        try:
            # Step 1: Candidates
            candidates = await self.invoice_repo.list_unpaid_due_before(now)
            logger.info(f"Found {len(candidates)} unpaid invoices past due date")

            result = MarkOverdueResultDTO(checked=len(candidates))

            for invoice in candidates:
                if not is_invoice_overdue(invoice, now):
                    continue

                # Step 2: Mark overdue
                invoice.status = InvoiceStatus.OVERDUE
                await self.invoice_repo.update(invoice)
                result.marked += 1
                result.invoice_numbers.append(invoice.invoice_number)

                # Step 3: Reminder
                if self.notification_repo is not None:
                    notification = await self.notification_repo.create(
                        self._reminder(invoice, now)
                    )
                    result.notified += 1
                    result.notification_ids.append(notification.id)

            # Step 4: Commit transaction
            await self.uow.commit()

            if result.marked:
                logger.warning(
                    f"{result.marked} invoices marked overdue: {', '.join(result.invoice_numbers)}"
                )

            return Return.ok(result)

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Overdue invoice scan failed: {e}")
            return Return.err(
                Error(
                    code="MARK_OVERDUE_FAILED",
                    message="Failed to mark overdue invoices",
                    reason=str(e),
                )
            )

    def _reminder(self, invoice: Invoice, now: datetime) -> Notification:
        data = {
            "invoiceNumber": invoice.invoice_number,
            "amount": str(invoice.balance_amount),
            "daysOverdue": max(0, days_overdue(invoice.due_date, now)),
            "message": (
                f"Invoice {invoice.invoice_number} is overdue. "
                f"Outstanding balance: {invoice.balance_amount} {invoice.currency}"
            ),
        }
        title, message = render_notification_template(NotificationType.SYSTEM_ALERT, data)
        return Notification(
            notification_id=generate_notification_id(),
            recipient_id=invoice.patient_id,
            type=NotificationType.SYSTEM_ALERT,
            priority=NotificationPriority.HIGH,
            title=title,
            message=message,
            data=data,
        )

"""RecordPayment Use Case

Applies a payment to an invoice. The payment record and the invoice balance
update are written in a single unit of work.
"""

import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.notification_repository import NotificationRepository
from src.domain.calculations import (
    calculate_balance,
    derive_payment_status,
    render_notification_template,
    to_decimal,
)
from src.domain.calculations.identifiers import generate_notification_id, generate_payment_id
from src.domain.invoice import InvoiceStatus
from src.domain.notification import Notification, NotificationPriority, NotificationType
from src.domain.payment import Payment, PaymentStatus
from src.domain.roles import Actor
from .dtos import RecordPaymentCommandDTO, RecordPaymentResponseDTO
from .mappers import to_invoice_dto, to_payment_dto

logger = logging.getLogger(__name__)

CLOSED_STATUSES = (InvoiceStatus.PAID, InvoiceStatus.CANCELLED)


class RecordPayment:
    """
    Use Case: Record a payment against an invoice

    Business Rules:
    1. Invoice must exist and be neither paid nor cancelled
    2. amount > 0 (validated by the DTO) and amount <= balance
    3. paid_amount += amount; balance = total - paid
    4. Status follows the balance: paid, partially_paid or pending
    5. Payment record and invoice update commit together or not at all

    Flow:
    1. Retrieve invoice and validate status
    2. Validate amount against outstanding balance
    3. Create payment record
    4. Update invoice amounts, status and payment details
    5. Notify the patient (optional)
    6. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        payment_repo: PaymentRepository,
        notification_repo: Optional[NotificationRepository] = None,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo
        self.notification_repo = notification_repo

    async def execute(
        self,
        invoice_id: str,
        command: RecordPaymentCommandDTO,
        actor: Optional[Actor] = None,
        now: Optional[datetime] = None,
    ) -> Result[RecordPaymentResponseDTO]:
        """
        Execute payment recording

        Args:
            invoice_id: Invoice the payment is applied to
            command: RecordPaymentCommandDTO with amount and method
            actor: Caller recorded as processed_by
            now: Reference time (defaults to current UTC time)

        Returns:
            Result[RecordPaymentResponseDTO]: Payment and updated invoice, or error
        """
        now = now or datetime.utcnow()

        try:
            # Step 1: Retrieve invoice
            invoice = await self.invoice_repo.get_by_id(invoice_id)

            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                    )
                )

            if invoice.status in CLOSED_STATUSES:
                return Return.err(
                    Error(
                        code="INVALID_INVOICE_STATUS",
                        message=f"Cannot record payment for a {InvoiceStatus(invoice.status).value} invoice",
                        reason="Invoice is already settled or cancelled",
                    )
                )

            # Step 2: Validate amount
            amount = to_decimal(command.amount)
            balance = calculate_balance(invoice.total_amount, invoice.paid_amount)

            if amount > balance:
                return Return.err(
                    Error(
                        code="PAYMENT_EXCEEDS_BALANCE",
                        message=f"Payment amount {amount} exceeds outstanding balance {balance}",
                        reason="Overpayment is not allowed",
                    )
                )

            payment_date = command.payment_date or now

            # Step 3: Create payment record
            payment = Payment(
                payment_id=generate_payment_id(),
                invoice_id=invoice.id,
                patient_id=invoice.patient_id,
                amount=amount,
                payment_method=command.payment_method,
                status=PaymentStatus.COMPLETED,
                transaction_id=command.transaction_id,
                reference_number=command.reference_number,
                cheque_number=command.cheque_number,
                bank_name=command.bank_name,
                processed_by=actor.user_id if actor else None,
                notes=command.notes,
                payment_date=payment_date,
            )
            created_payment = await self.payment_repo.create(payment)

            # Step 4: Update invoice
            invoice.paid_amount = to_decimal(invoice.paid_amount) + amount
            invoice.balance_amount = calculate_balance(invoice.total_amount, invoice.paid_amount)
            invoice.status = derive_payment_status(invoice.total_amount, invoice.paid_amount)
            invoice.payment_method = command.payment_method.value
            invoice.payment_date = payment_date
            updated_invoice = await self.invoice_repo.update(invoice)

            # Step 5: Notify patient
            if self.notification_repo is not None:
                data = {
                    "invoiceNumber": updated_invoice.invoice_number,
                    "amount": str(amount),
                    "paymentId": created_payment.payment_id,
                }
                title, message = render_notification_template(NotificationType.INVOICE_PAYMENT, data)
                await self.notification_repo.create(
                    Notification(
                        notification_id=generate_notification_id(),
                        recipient_id=updated_invoice.patient_id,
                        sender_id=actor.user_id if actor else None,
                        type=NotificationType.INVOICE_PAYMENT,
                        priority=NotificationPriority.MEDIUM,
                        title=title,
                        message=message,
                        data=data,
                    )
                )

            # Step 6: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Payment {created_payment.payment_id} of {amount} recorded for invoice "
                f"{updated_invoice.invoice_number}: balance {updated_invoice.balance_amount}, "
                f"status {InvoiceStatus(updated_invoice.status).value}"
            )

            return Return.ok(
                RecordPaymentResponseDTO(
                    payment=to_payment_dto(created_payment),
                    invoice=to_invoice_dto(updated_invoice, now=now),
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to record payment for invoice {invoice_id}: {e}")
            return Return.err(
                Error(
                    code="RECORD_PAYMENT_FAILED",
                    message="Failed to record payment",
                    reason=str(e),
                )
            )

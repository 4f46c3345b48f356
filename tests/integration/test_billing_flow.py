"""Integration tests for invoice, payment and overdue use cases with a real database"""

import pytest
from datetime import datetime
from decimal import Decimal

from sqlmodel.ext.asyncio.session import AsyncSession
from src.domain.invoice import InvoiceStatus
from src.domain.notification import NotificationType
from src.domain.roles import Actor, UserRole
from src.app.use_cases.billing import (
    CreateInvoice,
    CreateInvoiceCommandDTO,
    MarkOverdueInvoices,
    RecordPayment,
    RecordPaymentCommandDTO,
)
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.invoice_line_repository import SqlAlchemyInvoiceLineRepository
from src.adapter.repositories.notification_repository import SqlAlchemyNotificationRepository
from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork

ISSUED = datetime(2024, 1, 1, 9, 0)
RECEPTIONIST = Actor(user_id="REC001", role=UserRole.RECEPTIONIST)


def invoice_command(patient_id: str = "PAT20240042") -> CreateInvoiceCommandDTO:
    return CreateInvoiceCommandDTO(
        patient_id=patient_id,
        patient_name="Jane Doe",
        items=[{"description": "Consultation", "category": "consultation", "quantity": 1, "unit_price": "1000"}],
    )


async def issue_invoice(db_session: AsyncSession, patient_id: str = "PAT20240042"):
    use_case = CreateInvoice(
        SqlAlchemyUnitOfWork(db_session),
        SqlAlchemyInvoiceRepository(db_session),
        SqlAlchemyInvoiceLineRepository(db_session),
    )
    result = await use_case.execute(invoice_command(patient_id), actor=RECEPTIONIST, now=ISSUED)
    assert result.is_ok()
    return result.value


def payment_use_case(db_session: AsyncSession) -> RecordPayment:
    return RecordPayment(
        SqlAlchemyUnitOfWork(db_session),
        SqlAlchemyInvoiceRepository(db_session),
        SqlAlchemyPaymentRepository(db_session),
        SqlAlchemyNotificationRepository(db_session),
    )


@pytest.mark.asyncio
class TestBillingFlowIntegration:
    """Integration tests with real database"""

    async def test_invoice_persisted_with_lines(self, db_session: AsyncSession):
        # Act
        invoice = await issue_invoice(db_session)

        # Assert
        stored = await SqlAlchemyInvoiceRepository(db_session).get_by_id(invoice.id)
        lines = await SqlAlchemyInvoiceLineRepository(db_session).get_by_invoice_id(invoice.id)
        assert stored.invoice_number == invoice.invoice_number
        assert stored.due_date == datetime(2024, 1, 31, 9, 0)
        assert [line.description for line in lines] == ["Consultation"]

    async def test_timestamps_stored_as_naive_utc(self, db_session: AsyncSession):
        """
        Given: An invoice issued with a naive UTC timestamp and default audit columns
        When: It is written and read back
        Then: The write succeeds and every timestamp comes back naive, so overdue checks compare like with like
        """
        # Act
        invoice = await issue_invoice(db_session)

        # Assert
        stored = await SqlAlchemyInvoiceRepository(db_session).get_by_id(invoice.id)
        for value in (stored.invoice_date, stored.due_date, stored.created_at, stored.updated_at):
            assert value.tzinfo is None
        assert stored.invoice_date == ISSUED

    async def test_invoice_numbers_unique_and_formatted(self, db_session: AsyncSession):
        # Act
        numbers = [(await issue_invoice(db_session)).invoice_number for _ in range(3)]

        # Assert
        assert len(set(numbers)) == 3
        for number in numbers:
            prefix, year, sequence = number.split("-")
            assert prefix == "INV"
            assert year.isdigit() and len(year) == 4
            assert sequence.isdigit() and len(sequence) == 6

    async def test_rejected_payment_writes_nothing(self, db_session: AsyncSession):
        """
        Given: An invoice of 1000
        When: A payment of 1500 is attempted
        Then: No payment row exists and the balance is unchanged
        """
        # Arrange
        invoice = await issue_invoice(db_session)

        # Act
        result = await payment_use_case(db_session).execute(
            invoice.id, RecordPaymentCommandDTO(amount=Decimal("1500"), payment_method="cash"), actor=RECEPTIONIST
        )

        # Assert
        assert result.is_err()
        assert result.error.code == "PAYMENT_EXCEEDS_BALANCE"
        assert await SqlAlchemyPaymentRepository(db_session).get_by_invoice_id(invoice.id) == []
        stored = await SqlAlchemyInvoiceRepository(db_session).get_by_id(invoice.id)
        assert stored.balance_amount == Decimal("1000")

    async def test_overdue_scan_marks_and_reminds(self, db_session: AsyncSession):
        """
        Given: Two invoices due 2024-01-31, one of them fully paid
        When: The overdue scan runs on 2024-02-03
        Then: Only the unpaid invoice is marked, and its patient gets a reminder
        """
        # Arrange
        unpaid = await issue_invoice(db_session, "PAT20240001")
        paid = await issue_invoice(db_session, "PAT20240002")
        await payment_use_case(db_session).execute(
            paid.id, RecordPaymentCommandDTO(amount=Decimal("1000"), payment_method="card"), actor=RECEPTIONIST
        )
        use_case = MarkOverdueInvoices(
            SqlAlchemyUnitOfWork(db_session),
            SqlAlchemyInvoiceRepository(db_session),
            SqlAlchemyNotificationRepository(db_session),
        )

        # Act
        result = await use_case.execute(now=datetime(2024, 2, 3, 9, 0))

        # Assert
        assert result.is_ok()
        assert result.value.invoice_numbers == [unpaid.invoice_number]
        stored = await SqlAlchemyInvoiceRepository(db_session).get_by_id(unpaid.id)
        assert stored.status == InvoiceStatus.OVERDUE

        reminders = await SqlAlchemyNotificationRepository(db_session).list_by_recipient("PAT20240001")
        assert len(reminders) == 1
        assert reminders[0].type == NotificationType.SYSTEM_ALERT
        assert reminders[0].data["daysOverdue"] == 3

    async def test_overdue_invoice_can_still_be_settled(self, db_session: AsyncSession):
        # Arrange
        invoice = await issue_invoice(db_session)
        await MarkOverdueInvoices(
            SqlAlchemyUnitOfWork(db_session), SqlAlchemyInvoiceRepository(db_session)
        ).execute(now=datetime(2024, 3, 1))

        # Act
        result = await payment_use_case(db_session).execute(
            invoice.id, RecordPaymentCommandDTO(amount=Decimal("1000"), payment_method="upi"), actor=RECEPTIONIST
        )

        # Assert
        assert result.is_ok()
        assert result.value.invoice.status == "paid"
        assert result.value.invoice.balance_amount == Decimal("0")

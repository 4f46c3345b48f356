from .patient_repository import SqlAlchemyPatientRepository
from .visit_repository import SqlAlchemyVisitRepository
from .invoice_repository import SqlAlchemyInvoiceRepository
from .invoice_line_repository import SqlAlchemyInvoiceLineRepository
from .payment_repository import SqlAlchemyPaymentRepository
from .medicine_repository import SqlAlchemyMedicineRepository
from .stock_movement_repository import SqlAlchemyDispenseRepository, SqlAlchemyRestockRepository
from .medical_report_repository import SqlAlchemyMedicalReportRepository
from .notification_repository import SqlAlchemyNotificationRepository

__all__ = [
    "SqlAlchemyPatientRepository",
    "SqlAlchemyVisitRepository",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyInvoiceLineRepository",
    "SqlAlchemyPaymentRepository",
    "SqlAlchemyMedicineRepository",
    "SqlAlchemyDispenseRepository",
    "SqlAlchemyRestockRepository",
    "SqlAlchemyMedicalReportRepository",
    "SqlAlchemyNotificationRepository",
]

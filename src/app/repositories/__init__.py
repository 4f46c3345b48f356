from .patient_repository import PatientRepository
from .visit_repository import VisitRepository
from .invoice_repository import InvoiceRepository
from .invoice_line_repository import InvoiceLineRepository
from .payment_repository import PaymentRepository
from .medicine_repository import MedicineRepository
from .stock_movement_repository import DispenseRepository, RestockRepository
from .medical_report_repository import MedicalReportRepository
from .notification_repository import NotificationRepository

__all__ = [
    "PatientRepository",
    "VisitRepository",
    "InvoiceRepository",
    "InvoiceLineRepository",
    "PaymentRepository",
    "MedicineRepository",
    "DispenseRepository",
    "RestockRepository",
    "MedicalReportRepository",
    "NotificationRepository",
]

from .base import BaseModel, generate_uuid
from .roles import UserRole, Actor
from .patient import Patient, Gender, PatientStatus
from .visit import Visit, VisitType, VisitStatus
from .invoice import Invoice, InvoiceStatus
from .invoice_line import InvoiceLine, LineItemCategory
from .payment import Payment, PaymentMethod, PaymentStatus
from .medicine import Medicine, MedicineCategory, MedicineStatus
from .stock_movement import Dispense, Restock
from .medical_report import MedicalReport, ReportType, ReportStatus, ReportPriority
from .notification import (
    Notification,
    NotificationType,
    NotificationPriority,
    NotificationStatus,
)

__all__ = [
    "BaseModel",
    "generate_uuid",
    "UserRole",
    "Actor",
    "Patient",
    "Gender",
    "PatientStatus",
    "Visit",
    "VisitType",
    "VisitStatus",
    "Invoice",
    "InvoiceStatus",
    "InvoiceLine",
    "LineItemCategory",
    "Payment",
    "PaymentMethod",
    "PaymentStatus",
    "Medicine",
    "MedicineCategory",
    "MedicineStatus",
    "Dispense",
    "Restock",
    "MedicalReport",
    "ReportType",
    "ReportStatus",
    "ReportPriority",
    "Notification",
    "NotificationType",
    "NotificationPriority",
    "NotificationStatus",
]

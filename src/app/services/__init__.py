from .unit_of_work import UnitOfWork
from .notification_service import NotificationService
from .pdf_service import PdfService
from .storage_service import StorageService, StorageError, StoredFile

__all__ = [
    "UnitOfWork",
    "NotificationService",
    "PdfService",
    "StorageService",
    "StorageError",
    "StoredFile",
]

"""Filters, summaries and pagination over in-memory collections"""
from .filters import (
    PatientFilters,
    VisitFilters,
    InvoiceFilters,
    PaymentFilters,
    MedicineFilters,
    ReportFilters,
    NotificationFilters,
    filter_patients,
    filter_visits,
    filter_invoices,
    filter_payments,
    filter_medicines,
    filter_reports,
    filter_notifications,
    is_unset,
    sort_notifications,
)
from .summaries import (
    PatientSummary,
    BillingSummary,
    PaymentSummary,
    InventorySummary,
    VisitSummary,
    ReportSummary,
    NotificationSummary,
    summarize_patients,
    summarize_invoices,
    summarize_payments,
    summarize_medicines,
    summarize_visits,
    summarize_reports,
    summarize_notifications,
    percentage,
)
from .pagination import PageQuery, paginate

__all__ = [
    "PatientFilters",
    "VisitFilters",
    "InvoiceFilters",
    "PaymentFilters",
    "MedicineFilters",
    "ReportFilters",
    "NotificationFilters",
    "filter_patients",
    "filter_visits",
    "filter_invoices",
    "filter_payments",
    "filter_medicines",
    "filter_reports",
    "filter_notifications",
    "is_unset",
    "sort_notifications",
    "PatientSummary",
    "BillingSummary",
    "PaymentSummary",
    "InventorySummary",
    "VisitSummary",
    "ReportSummary",
    "NotificationSummary",
    "summarize_patients",
    "summarize_invoices",
    "summarize_payments",
    "summarize_medicines",
    "summarize_visits",
    "summarize_reports",
    "summarize_notifications",
    "percentage",
    "PageQuery",
    "paginate",
]

"""Billing domain use cases"""
from .create_invoice import CreateInvoice
from .update_invoice import UpdateInvoice
from .delete_invoice import DeleteInvoice
from .get_invoice import GetInvoice
from .list_invoices import ListInvoices
from .get_billing_summary import GetBillingSummary, GetPaymentSummary
from .record_payment import RecordPayment
from .list_payments import ListPayments
from .generate_invoice_pdf import GenerateInvoicePdf
from .mark_overdue_invoices import MarkOverdueInvoices
from .dtos import (
    InvoiceLineItemDTO,
    CreateInvoiceCommandDTO,
    UpdateInvoiceCommandDTO,
    InvoiceLineResponseDTO,
    InvoiceResponseDTO,
    ListInvoicesResponseDTO,
    RecordPaymentCommandDTO,
    PaymentResponseDTO,
    RecordPaymentResponseDTO,
    ListPaymentsResponseDTO,
    InvoicePdfResponseDTO,
    MarkOverdueResultDTO,
    DeleteInvoiceResponseDTO,
)

__all__ = [
    "CreateInvoice",
    "UpdateInvoice",
    "DeleteInvoice",
    "GetInvoice",
    "ListInvoices",
    "GetBillingSummary",
    "GetPaymentSummary",
    "RecordPayment",
    "ListPayments",
    "GenerateInvoicePdf",
    "MarkOverdueInvoices",
    "InvoiceLineItemDTO",
    "CreateInvoiceCommandDTO",
    "UpdateInvoiceCommandDTO",
    "InvoiceLineResponseDTO",
    "InvoiceResponseDTO",
    "ListInvoicesResponseDTO",
    "RecordPaymentCommandDTO",
    "PaymentResponseDTO",
    "RecordPaymentResponseDTO",
    "ListPaymentsResponseDTO",
    "InvoicePdfResponseDTO",
    "MarkOverdueResultDTO",
    "DeleteInvoiceResponseDTO",
]

"""Background workers for the hospital service"""
from .stock_alert_worker import StockAlertWorker
from .overdue_invoice_worker import OverdueInvoiceWorker

__all__ = ["StockAlertWorker", "OverdueInvoiceWorker"]

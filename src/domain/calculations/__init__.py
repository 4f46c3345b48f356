from .billing import (
    InvoiceTotals,
    calculate_balance,
    calculate_invoice_totals,
    calculate_line_total,
    days_overdue,
    derive_payment_status,
    is_invoice_overdue,
    to_decimal,
)
from .inventory import (
    DEFAULT_EXPIRING_SOON_DAYS,
    calculate_medicine_status,
    calculate_stock_value,
    days_until_expiry,
    is_expired,
    is_expiring_soon,
    medicine_status,
)
from .clinical import calculate_age, calculate_length_of_stay, validate_vitals
from .access import (
    can_delete_invoice,
    can_user_access_report,
    can_user_delete_report,
    can_user_upload_report,
)
from .notifications import render_notification_template, sort_notifications
from .uploads import ALLOWED_FILE_TYPES, MAX_FILE_SIZE, validate_report_file

__all__ = [
    "InvoiceTotals",
    "calculate_balance",
    "calculate_invoice_totals",
    "calculate_line_total",
    "days_overdue",
    "derive_payment_status",
    "is_invoice_overdue",
    "to_decimal",
    "DEFAULT_EXPIRING_SOON_DAYS",
    "calculate_medicine_status",
    "calculate_stock_value",
    "days_until_expiry",
    "is_expired",
    "is_expiring_soon",
    "medicine_status",
    "calculate_age",
    "calculate_length_of_stay",
    "validate_vitals",
    "can_delete_invoice",
    "can_user_access_report",
    "can_user_delete_report",
    "can_user_upload_report",
    "render_notification_template",
    "sort_notifications",
    "ALLOWED_FILE_TYPES",
    "MAX_FILE_SIZE",
    "validate_report_file",
]

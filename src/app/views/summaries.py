"""Dashboard summaries

Each ``summarize_*`` reduces a full collection into count/sum cards.

Guarantees:
- The input is never mutated
- The total count always equals len(collection), including for empty input
- Percentage and average fields report 0 when their denominator is 0
- Derived states (overdue invoices, stock status) are recomputed here, not
  read from stored status fields
"""

from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel, Field

from src.domain.calculations import (
    DEFAULT_EXPIRING_SOON_DAYS,
    calculate_age,
    calculate_length_of_stay,
    calculate_stock_value,
    is_invoice_overdue,
    medicine_status,
    to_decimal,
)
from src.domain.invoice import InvoiceStatus
from src.domain.medicine import MedicineCategory, MedicineStatus
from src.domain.medical_report import ReportPriority, ReportStatus, ReportType
from src.domain.notification import NotificationPriority, NotificationStatus, NotificationType
from src.domain.patient import Gender, PatientStatus
from src.domain.payment import PaymentMethod, PaymentStatus
from src.domain.visit import VisitStatus, VisitType

ZERO = Decimal("0")


def _value(item: Any) -> Any:
    return item.value if hasattr(item, "value") else item


def _as_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    return value


def percentage(part: Any, total: Any) -> float:
    """part / total * 100 rounded to 2 places, 0 when total is 0"""
    if not total:
        return 0.0
    return round(float(part) / float(total) * 100, 2)


def _round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _count(items: Iterable[Any], predicate) -> int:
    return sum(1 for item in items if predicate(item))


def _month_start(today: date) -> date:
    return today.replace(day=1)


class PatientSummary(BaseModel):
    total_patients: int = 0
    male_count: int = 0
    female_count: int = 0
    other_count: int = 0
    active_patients: int = 0
    inactive_patients: int = 0
    average_age: int = 0
    male_percentage: float = 0.0
    female_percentage: float = 0.0


class BillingSummary(BaseModel):
    total_invoices: int = 0
    total_revenue: Decimal = ZERO
    paid_invoices: int = 0
    pending_invoices: int = 0
    partially_paid_invoices: int = 0
    overdue_invoices: int = 0
    outstanding_balance: Decimal = ZERO
    today_revenue: Decimal = ZERO
    monthly_revenue: Decimal = ZERO
    average_invoice_amount: Decimal = ZERO
    collection_rate: float = Field(default=0.0, description="Paid amount / billed amount, in percent")


class PaymentSummary(BaseModel):
    total_payments: int = 0
    total_collected: Decimal = ZERO
    method_counts: Dict[str, int] = Field(default_factory=dict)
    today_payments: int = 0
    monthly_payments: int = 0


class InventorySummary(BaseModel):
    total_medicines: int = 0
    total_value: Decimal = ZERO
    low_stock_items: int = 0
    expired_items: int = 0
    expiring_soon_items: int = 0
    out_of_stock_items: int = 0
    available_items: int = 0
    category_counts: Dict[str, int] = Field(default_factory=dict)


class VisitSummary(BaseModel):
    total_visits: int = 0
    opd_visits: int = 0
    ipd_visits: int = 0
    active_ipd: int = 0
    completed_visits: int = 0
    today_visits: int = 0
    average_length_of_stay: float = Field(default=0.0, description="Days, over discharged IPD visits")


class ReportSummary(BaseModel):
    total_reports: int = 0
    lab_reports: int = 0
    radiology_reports: int = 0
    prescription_reports: int = 0
    pending_review: int = 0
    urgent_reports: int = 0
    today_uploads: int = 0


class NotificationSummary(BaseModel):
    total_notifications: int = 0
    unread_count: int = 0
    today_count: int = 0
    high_priority_count: int = 0
    type_distribution: Dict[str, int] = Field(default_factory=dict)


def summarize_patients(patients: Iterable[Any], today: Optional[date] = None) -> PatientSummary:
    patients = list(patients)
    today = today or date.today()
    total = len(patients)

    male = _count(patients, lambda p: _value(p.gender) == Gender.MALE.value)
    female = _count(patients, lambda p: _value(p.gender) == Gender.FEMALE.value)
    other = _count(patients, lambda p: _value(p.gender) == Gender.OTHER.value)

    ages = [
        calculate_age(p.date_of_birth, today) if p.date_of_birth else (p.age or 0)
        for p in patients
    ]
    average_age = _round_half_up(Decimal(sum(ages)) / total) if total else 0

    return PatientSummary(
        total_patients=total,
        male_count=male,
        female_count=female,
        other_count=other,
        active_patients=_count(patients, lambda p: _value(p.status) == PatientStatus.ACTIVE.value),
        inactive_patients=_count(patients, lambda p: _value(p.status) == PatientStatus.INACTIVE.value),
        average_age=average_age,
        male_percentage=percentage(male, total),
        female_percentage=percentage(female, total),
    )


def summarize_invoices(invoices: Iterable[Any], now: Optional[datetime] = None) -> BillingSummary:
    invoices = list(invoices)
    now = now or datetime.utcnow()
    today = now.date()
    month_start = _month_start(today)
    total = len(invoices)

    def has_status(status: InvoiceStatus):
        return lambda inv: _value(inv.status) == status.value

    is_paid = has_status(InvoiceStatus.PAID)
    is_cancelled = has_status(InvoiceStatus.CANCELLED)

    total_revenue = sum((to_decimal(inv.total_amount) for inv in invoices), ZERO)
    total_paid = sum((to_decimal(inv.paid_amount) for inv in invoices), ZERO)
    outstanding = sum(
        (to_decimal(inv.balance_amount) for inv in invoices if not is_cancelled(inv)),
        ZERO,
    )
    today_revenue = sum(
        (to_decimal(inv.total_amount) for inv in invoices
         if is_paid(inv) and _as_date(inv.invoice_date) == today),
        ZERO,
    )
    monthly_revenue = sum(
        (to_decimal(inv.total_amount) for inv in invoices
         if is_paid(inv) and _as_date(inv.invoice_date) >= month_start),
        ZERO,
    )

    return BillingSummary(
        total_invoices=total,
        total_revenue=total_revenue,
        paid_invoices=_count(invoices, is_paid),
        pending_invoices=_count(invoices, has_status(InvoiceStatus.PENDING)),
        partially_paid_invoices=_count(invoices, has_status(InvoiceStatus.PARTIALLY_PAID)),
        overdue_invoices=_count(
            invoices, lambda inv: not is_cancelled(inv) and is_invoice_overdue(inv, now)
        ),
        outstanding_balance=outstanding,
        today_revenue=today_revenue,
        monthly_revenue=monthly_revenue,
        average_invoice_amount=(total_revenue / total) if total else ZERO,
        collection_rate=percentage(total_paid, total_revenue),
    )


def summarize_payments(payments: Iterable[Any], now: Optional[datetime] = None) -> PaymentSummary:
    payments = list(payments)
    now = now or datetime.utcnow()
    today = now.date()
    month_start = _month_start(today)

    method_counts = {method.value: 0 for method in PaymentMethod}
    for payment in payments:
        method = _value(payment.payment_method)
        method_counts[method] = method_counts.get(method, 0) + 1

    return PaymentSummary(
        total_payments=len(payments),
        total_collected=sum(
            (to_decimal(p.amount) for p in payments
             if _value(p.status) == PaymentStatus.COMPLETED.value),
            ZERO,
        ),
        method_counts=method_counts,
        today_payments=_count(payments, lambda p: _as_date(p.payment_date) == today),
        monthly_payments=_count(payments, lambda p: _as_date(p.payment_date) >= month_start),
    )


def summarize_medicines(
    medicines: Iterable[Any],
    today: Optional[date] = None,
    expiring_soon_days: int = DEFAULT_EXPIRING_SOON_DAYS,
) -> InventorySummary:
    medicines = list(medicines)
    today = today or date.today()

    status_counts = {status.value: 0 for status in MedicineStatus}
    category_counts = {category.value: 0 for category in MedicineCategory}
    total_value = ZERO

    for medicine in medicines:
        status = medicine_status(medicine, today, expiring_soon_days)
        status_counts[status.value] += 1
        category = _value(medicine.category)
        category_counts[category] = category_counts.get(category, 0) + 1
        total_value += calculate_stock_value(medicine.quantity, medicine.unit_price)

    return InventorySummary(
        total_medicines=len(medicines),
        total_value=total_value,
        low_stock_items=status_counts[MedicineStatus.LOW_STOCK.value],
        expired_items=status_counts[MedicineStatus.EXPIRED.value],
        expiring_soon_items=status_counts[MedicineStatus.EXPIRING_SOON.value],
        out_of_stock_items=status_counts[MedicineStatus.OUT_OF_STOCK.value],
        available_items=status_counts[MedicineStatus.AVAILABLE.value],
        category_counts=category_counts,
    )


def summarize_visits(visits: Iterable[Any], now: Optional[datetime] = None) -> VisitSummary:
    visits = list(visits)
    now = now or datetime.utcnow()
    today = now.date()

    def is_type(visit_type: VisitType):
        return lambda v: _value(v.visit_type) == visit_type.value

    is_ipd = is_type(VisitType.IPD)
    finished = {VisitStatus.COMPLETED.value, VisitStatus.DISCHARGED.value}

    stays = [
        calculate_length_of_stay(v.admission_date, v.discharge_date, now)
        for v in visits
        if is_ipd(v) and v.admission_date and v.discharge_date
    ]

    return VisitSummary(
        total_visits=len(visits),
        opd_visits=_count(visits, is_type(VisitType.OPD)),
        ipd_visits=_count(visits, is_ipd),
        active_ipd=_count(visits, lambda v: is_ipd(v) and _value(v.status) == VisitStatus.ACTIVE.value),
        completed_visits=_count(visits, lambda v: _value(v.status) in finished),
        today_visits=_count(visits, lambda v: _as_date(v.visit_date) == today),
        average_length_of_stay=round(sum(stays) / len(stays), 2) if stays else 0.0,
    )


def summarize_reports(reports: Iterable[Any], now: Optional[datetime] = None) -> ReportSummary:
    reports = list(reports)
    now = now or datetime.utcnow()
    today = now.date()

    def of_type(report_type: ReportType):
        return lambda r: _value(r.report_type) == report_type.value

    urgent = {ReportPriority.URGENT.value, ReportPriority.CRITICAL.value}

    return ReportSummary(
        total_reports=len(reports),
        lab_reports=_count(reports, of_type(ReportType.LAB)),
        radiology_reports=_count(reports, of_type(ReportType.RADIOLOGY)),
        prescription_reports=_count(reports, of_type(ReportType.PRESCRIPTION)),
        pending_review=_count(reports, lambda r: _value(r.status) == ReportStatus.PENDING_REVIEW.value),
        urgent_reports=_count(reports, lambda r: _value(r.priority) in urgent),
        today_uploads=_count(reports, lambda r: _as_date(r.created_at) == today),
    )


def summarize_notifications(
    notifications: Iterable[Any],
    now: Optional[datetime] = None,
) -> NotificationSummary:
    notifications = list(notifications)
    now = now or datetime.utcnow()
    today = now.date()

    high = {NotificationPriority.HIGH.value, NotificationPriority.CRITICAL.value}
    type_distribution = {kind.value: 0 for kind in NotificationType}
    for notification in notifications:
        kind = _value(notification.type)
        type_distribution[kind] = type_distribution.get(kind, 0) + 1

    return NotificationSummary(
        total_notifications=len(notifications),
        unread_count=_count(
            notifications, lambda n: _value(n.status) == NotificationStatus.UNREAD.value
        ),
        today_count=_count(notifications, lambda n: _as_date(n.created_at) == today),
        high_priority_count=_count(notifications, lambda n: _value(n.priority) in high),
        type_distribution=type_distribution,
    )

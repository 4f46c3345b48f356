"""Collection filters

Pure functions that narrow an in-memory collection using a filter object.

Rules shared by every filter:
- A field that is None, "" or "all" matches everything for that dimension
- Set dimensions are combined with AND
- ``search`` is a case-insensitive substring match over a fixed set of
  display fields per entity
- Numeric ranges are inclusive; a None bound is unbounded
- Date ranges compare the calendar date, inclusive; a None bound is
  unbounded on that side
- Input order is preserved and the input is never mutated
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Iterable, List, Optional

from pydantic import Field

from src.domain.calculations import (
    DEFAULT_EXPIRING_SOON_DAYS,
    is_invoice_overdue,
    medicine_status,
    sort_notifications,
)
from src.domain.invoice import InvoiceStatus

from .pagination import PageQuery

ALL = "all"


def is_unset(value: Any) -> bool:
    """True when a filter field should match everything"""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == "" or value.strip().lower() == ALL
    if isinstance(value, (list, tuple, set)):
        return len(value) == 0
    return False


def _value(item: Any) -> Any:
    return item.value if hasattr(item, "value") else item


def _equals(actual: Any, expected: Any) -> bool:
    return is_unset(expected) or _value(actual) == _value(expected)


def _contains_text(needle: Optional[str], *haystacks: Optional[str]) -> bool:
    if is_unset(needle):
        return True
    needle = needle.lower()
    return any(needle in (h or "").lower() for h in haystacks)


def _in_range(value: Any, low: Any, high: Any) -> bool:
    if value is None:
        return low is None and high is None
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True


def _as_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    return value


def _in_date_range(value: Any, start: Optional[date], end: Optional[date]) -> bool:
    return _in_range(_as_date(value), _as_date(start), _as_date(end))


def _apply(items: Iterable[Any], predicate: Callable[[Any], bool]) -> List[Any]:
    return [item for item in items if predicate(item)]


# ---------------------------------------------------------------------------
# Filter objects
# ---------------------------------------------------------------------------


class PatientFilters(PageQuery):
    search: Optional[str] = None
    gender: Optional[str] = None
    blood_group: Optional[str] = None
    status: Optional[str] = None
    min_age: Optional[int] = Field(default=None, ge=0)
    max_age: Optional[int] = Field(default=None, ge=0)


class VisitFilters(PageQuery):
    search: Optional[str] = None
    visit_type: Optional[str] = None
    status: Optional[str] = None
    doctor_id: Optional[str] = None
    patient_id: Optional[str] = None
    diagnosis: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class InvoiceFilters(PageQuery):
    search: Optional[str] = None
    status: Optional[str] = Field(
        default=None,
        description="Stored status; 'overdue' matches the derived overdue state"
    )
    payment_method: Optional[str] = None
    visit_type: Optional[str] = None
    doctor_id: Optional[str] = None
    patient_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    min_amount: Optional[Decimal] = Field(default=None, ge=0)
    max_amount: Optional[Decimal] = Field(default=None, ge=0)


class PaymentFilters(PageQuery):
    invoice_id: Optional[str] = None
    patient_id: Optional[str] = None
    payment_method: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class MedicineFilters(PageQuery):
    search: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = Field(
        default=None,
        description="Derived stock status (available, low_stock, ...)"
    )
    vendor_id: Optional[str] = None
    expiry_from: Optional[date] = None
    expiry_to: Optional[date] = None
    min_price: Optional[Decimal] = Field(default=None, ge=0)
    max_price: Optional[Decimal] = Field(default=None, ge=0)


class ReportFilters(PageQuery):
    search: Optional[str] = None
    report_type: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    uploaded_by: Optional[str] = None
    patient_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    tags: List[str] = Field(default_factory=list)


class NotificationFilters(PageQuery):
    type: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


# ---------------------------------------------------------------------------
# Filter functions
# ---------------------------------------------------------------------------


def filter_patients(patients: Iterable[Any], filters: Optional[PatientFilters] = None) -> List[Any]:
    f = filters or PatientFilters()

    def matches(p: Any) -> bool:
        return (
            _contains_text(f.search, f"{p.first_name} {p.last_name}", p.patient_id, p.email)
            and _equals(p.gender, f.gender)
            and _equals(p.blood_group, f.blood_group)
            and _equals(p.status, f.status)
            and _in_range(p.age, f.min_age, f.max_age)
        )

    return _apply(patients, matches)


def filter_visits(visits: Iterable[Any], filters: Optional[VisitFilters] = None) -> List[Any]:
    f = filters or VisitFilters()

    def matches(v: Any) -> bool:
        return (
            _contains_text(f.search, v.patient_name, v.visit_id, v.doctor_name)
            and _equals(v.visit_type, f.visit_type)
            and _equals(v.status, f.status)
            and _equals(v.doctor_id, f.doctor_id)
            and _equals(v.patient_id, f.patient_id)
            and _contains_text(f.diagnosis, v.diagnosis)
            and _in_date_range(v.visit_date, f.start_date, f.end_date)
        )

    return _apply(visits, matches)


def filter_invoices(
    invoices: Iterable[Any],
    filters: Optional[InvoiceFilters] = None,
    now: Optional[datetime] = None,
) -> List[Any]:
    f = filters or InvoiceFilters()
    now = now or datetime.utcnow()

    def matches_status(inv: Any) -> bool:
        if is_unset(f.status):
            return True
        if f.status == InvoiceStatus.OVERDUE.value:
            return _value(inv.status) != InvoiceStatus.CANCELLED.value and is_invoice_overdue(inv, now)
        return _value(inv.status) == f.status

    def matches(inv: Any) -> bool:
        return (
            _contains_text(f.search, inv.patient_name, inv.invoice_number, inv.doctor_name)
            and matches_status(inv)
            and _equals(inv.payment_method, f.payment_method)
            and _equals(inv.visit_type, f.visit_type)
            and _equals(inv.doctor_id, f.doctor_id)
            and _equals(inv.patient_id, f.patient_id)
            and _in_date_range(inv.invoice_date, f.start_date, f.end_date)
            and _in_range(inv.total_amount, f.min_amount, f.max_amount)
        )

    return _apply(invoices, matches)


def filter_payments(payments: Iterable[Any], filters: Optional[PaymentFilters] = None) -> List[Any]:
    f = filters or PaymentFilters()

    def matches(p: Any) -> bool:
        return (
            _equals(p.invoice_id, f.invoice_id)
            and _equals(p.patient_id, f.patient_id)
            and _equals(p.payment_method, f.payment_method)
            and _in_date_range(p.payment_date, f.start_date, f.end_date)
        )

    return _apply(payments, matches)


def filter_medicines(
    medicines: Iterable[Any],
    filters: Optional[MedicineFilters] = None,
    today: Optional[date] = None,
    expiring_soon_days: int = DEFAULT_EXPIRING_SOON_DAYS,
) -> List[Any]:
    f = filters or MedicineFilters()
    today = today or date.today()

    def matches(m: Any) -> bool:
        return (
            _contains_text(f.search, m.name, m.manufacturer, m.medicine_id)
            and _equals(m.category, f.category)
            and _equals(medicine_status(m, today, expiring_soon_days), f.status)
            and _equals(m.vendor_id, f.vendor_id)
            and _in_date_range(m.expiry_date, f.expiry_from, f.expiry_to)
            and _in_range(m.unit_price, f.min_price, f.max_price)
        )

    return _apply(medicines, matches)


def filter_reports(reports: Iterable[Any], filters: Optional[ReportFilters] = None) -> List[Any]:
    f = filters or ReportFilters()

    def matches_tags(r: Any) -> bool:
        if is_unset(f.tags):
            return True
        return any(tag in (r.tags or []) for tag in f.tags)

    def matches(r: Any) -> bool:
        return (
            _contains_text(f.search, r.title, r.patient_name, r.description)
            and _equals(r.report_type, f.report_type)
            and _equals(r.status, f.status)
            and _equals(r.priority, f.priority)
            and _equals(r.uploaded_by, f.uploaded_by)
            and _equals(r.patient_id, f.patient_id)
            and _in_date_range(r.report_date, f.start_date, f.end_date)
            and matches_tags(r)
        )

    return _apply(reports, matches)


def filter_notifications(
    notifications: Iterable[Any],
    filters: Optional[NotificationFilters] = None,
) -> List[Any]:
    f = filters or NotificationFilters()

    def matches(n: Any) -> bool:
        return (
            _equals(n.type, f.type)
            and _equals(n.priority, f.priority)
            and _equals(n.status, f.status)
            and _in_date_range(n.created_at, f.start_date, f.end_date)
        )

    return _apply(notifications, matches)


__all__ = [
    "ALL",
    "is_unset",
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
    "sort_notifications",
]

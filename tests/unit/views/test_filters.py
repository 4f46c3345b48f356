"""Unit tests for collection filters"""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal
from types import SimpleNamespace

from src.app.views import (
    InvoiceFilters,
    MedicineFilters,
    NotificationFilters,
    PatientFilters,
    PaymentFilters,
    ReportFilters,
    VisitFilters,
    filter_invoices,
    filter_medicines,
    filter_notifications,
    filter_patients,
    filter_payments,
    filter_reports,
    filter_visits,
)
from src.domain.invoice import InvoiceStatus
from src.domain.medicine import MedicineCategory

NOW = datetime(2024, 6, 15, 12, 0, 0)
TODAY = NOW.date()


def patient(first, last, gender, age, status="active", blood_group="O+", email=""):
    return SimpleNamespace(
        first_name=first,
        last_name=last,
        patient_id=f"PAT2024{first[:4].upper()}",
        email=email,
        gender=gender,
        age=age,
        status=status,
        blood_group=blood_group,
    )


@pytest.fixture
def patients():
    return [
        patient("Alice", "Smith", "female", 34, email="alice@example.com"),
        patient("Bob", "Jones", "male", 61, status="inactive", blood_group="A-"),
        patient("Carlos", "Smithers", "male", 18),
    ]


def invoice(number, status, total, due_in_days, patient_name="Jane Doe", method=None):
    return SimpleNamespace(
        invoice_number=number,
        status=status,
        total_amount=Decimal(total),
        patient_name=patient_name,
        doctor_name="Dr. House",
        payment_method=method,
        visit_type="opd",
        doctor_id="doc_1",
        patient_id="pat_1",
        invoice_date=NOW - timedelta(days=10),
        due_date=NOW + timedelta(days=due_in_days),
    )


@pytest.fixture
def invoices():
    return [
        invoice("INV-2024-000001", InvoiceStatus.PENDING, "100", -1),
        invoice("INV-2024-000002", InvoiceStatus.PAID, "250", -5, method="cash"),
        invoice("INV-2024-000003", InvoiceStatus.PARTIALLY_PAID, "900", 10),
        invoice("INV-2024-000004", InvoiceStatus.CANCELLED, "50", -20),
    ]


class TestPatientFilters:
    def test_empty_filter_returns_input_unchanged(self, patients):
        assert filter_patients(patients, PatientFilters()) == patients
        assert filter_patients(patients) == patients

    def test_all_sentinel_matches_everything(self, patients):
        filters = PatientFilters(gender="all", status="", blood_group="ALL")

        assert filter_patients(patients, filters) == patients

    def test_search_is_case_insensitive_substring(self, patients):
        result = filter_patients(patients, PatientFilters(search="smith"))

        assert [p.first_name for p in result] == ["Alice", "Carlos"]

    def test_search_matches_email(self, patients):
        result = filter_patients(patients, PatientFilters(search="ALICE@"))

        assert [p.first_name for p in result] == ["Alice"]

    def test_dimensions_are_anded(self, patients):
        result = filter_patients(patients, PatientFilters(gender="male", status="active"))

        assert [p.first_name for p in result] == ["Carlos"]

    def test_age_range_is_inclusive(self, patients):
        result = filter_patients(patients, PatientFilters(min_age=18, max_age=34))

        assert [p.age for p in result] == [34, 18]

    def test_filtering_is_idempotent(self, patients):
        filters = PatientFilters(search="s", gender="male")
        once = filter_patients(patients, filters)

        assert filter_patients(once, filters) == once


class TestInvoiceFilters:
    def test_overdue_status_is_derived(self, invoices):
        """
        Given: A pending invoice past due, a paid one past due and a cancelled one past due
        When: Filtering on status=overdue
        Then: Only the unpaid, non-cancelled one matches
        """
        result = filter_invoices(invoices, InvoiceFilters(status="overdue"), NOW)

        assert [i.invoice_number for i in result] == ["INV-2024-000001"]

    def test_stored_status(self, invoices):
        result = filter_invoices(invoices, InvoiceFilters(status="paid"), NOW)

        assert [i.invoice_number for i in result] == ["INV-2024-000002"]

    def test_amount_range(self, invoices):
        filters = InvoiceFilters(min_amount=Decimal("100"), max_amount=Decimal("250"))

        result = filter_invoices(invoices, filters, NOW)

        assert [i.total_amount for i in result] == [Decimal("100"), Decimal("250")]

    def test_date_range_with_open_end(self, invoices):
        filters = InvoiceFilters(start_date=TODAY - timedelta(days=10))

        assert filter_invoices(invoices, filters, NOW) == invoices

    def test_date_range_excludes(self, invoices):
        filters = InvoiceFilters(end_date=TODAY - timedelta(days=11))

        assert filter_invoices(invoices, filters, NOW) == []

    def test_search_by_invoice_number(self, invoices):
        result = filter_invoices(invoices, InvoiceFilters(search="000003"), NOW)

        assert len(result) == 1

    def test_idempotent(self, invoices):
        filters = InvoiceFilters(status="overdue")
        once = filter_invoices(invoices, filters, NOW)

        assert filter_invoices(once, filters, NOW) == once


class TestMedicineFilters:
    @pytest.fixture
    def medicines(self):
        def medicine(name, quantity, expiry_days, price, category=MedicineCategory.TABLET):
            return SimpleNamespace(
                name=name,
                manufacturer="Acme Pharma",
                medicine_id=f"MED{name[:3].upper()}",
                category=category,
                quantity=quantity,
                min_threshold=10,
                expiry_date=TODAY + timedelta(days=expiry_days),
                unit_price=Decimal(price),
                vendor_id="vendor_1",
            )

        return [
            medicine("Paracetamol", 200, 365, "1.50"),
            medicine("Amoxicillin", 0, 365, "4.00", MedicineCategory.CAPSULE),
            medicine("Ibuprofen", 5, 365, "2.00"),
            medicine("Insulin", 50, -3, "30.00", MedicineCategory.INJECTION),
        ]

    def test_status_filter_uses_derived_status(self, medicines):
        filters = MedicineFilters(status="expired")

        result = filter_medicines(medicines, filters, TODAY)

        assert [m.name for m in result] == ["Insulin"]

    def test_low_stock(self, medicines):
        result = filter_medicines(medicines, MedicineFilters(status="low_stock"), TODAY)

        assert [m.name for m in result] == ["Ibuprofen"]

    def test_category_and_price(self, medicines):
        filters = MedicineFilters(category="tablet", max_price=Decimal("1.50"))

        result = filter_medicines(medicines, filters, TODAY)

        assert [m.name for m in result] == ["Paracetamol"]

    def test_empty_filter(self, medicines):
        assert filter_medicines(medicines, MedicineFilters(), TODAY) == medicines


class TestOtherFilters:
    def test_visits(self):
        visits = [
            SimpleNamespace(
                patient_name="Jane Doe", visit_id="VIS1", doctor_name="Dr. A", visit_type="opd",
                status="active", doctor_id="d1", patient_id="p1", diagnosis="Migraine",
                visit_date=NOW,
            ),
            SimpleNamespace(
                patient_name="John Roe", visit_id="VIS2", doctor_name="Dr. B", visit_type="ipd",
                status="discharged", doctor_id="d2", patient_id="p2", diagnosis="Fracture",
                visit_date=NOW - timedelta(days=3),
            ),
        ]

        assert [v.visit_id for v in filter_visits(visits, VisitFilters(visit_type="ipd"))] == ["VIS2"]
        assert [v.visit_id for v in filter_visits(visits, VisitFilters(diagnosis="migr"))] == ["VIS1"]
        assert [v.visit_id for v in filter_visits(visits, VisitFilters(start_date=TODAY))] == ["VIS1"]

    def test_payments(self):
        payments = [
            SimpleNamespace(invoice_id="i1", patient_id="p1", payment_method="cash", payment_date=NOW),
            SimpleNamespace(invoice_id="i2", patient_id="p1", payment_method="card", payment_date=NOW),
        ]

        assert len(filter_payments(payments, PaymentFilters(payment_method="card"))) == 1
        assert len(filter_payments(payments, PaymentFilters(patient_id="p1"))) == 2

    def test_reports_by_tag(self):
        reports = [
            SimpleNamespace(
                title="CBC", patient_name="Jane", description="", report_type="lab", status="uploaded",
                priority="normal", uploaded_by="t1", patient_id="p1", report_date=TODAY, tags=["blood"],
            ),
            SimpleNamespace(
                title="Chest X-Ray", patient_name="Jane", description="", report_type="radiology",
                status="uploaded", priority="urgent", uploaded_by="d1", patient_id="p1",
                report_date=TODAY, tags=None,
            ),
        ]

        assert [r.title for r in filter_reports(reports, ReportFilters(tags=["blood"]))] == ["CBC"]
        assert len(filter_reports(reports, ReportFilters())) == 2

    def test_notifications(self):
        notifications = [
            SimpleNamespace(type="system_alert", priority="high", status="unread", created_at=NOW),
            SimpleNamespace(type="low_stock_alert", priority="low", status="read", created_at=NOW),
        ]

        result = filter_notifications(notifications, NotificationFilters(status="unread"))

        assert [n.type for n in result] == ["system_alert"]
